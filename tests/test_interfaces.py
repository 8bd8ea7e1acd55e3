"""
Tests for the MCP server, REST API and CLI surfaces.
"""

import asyncio
import inspect

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from date_operations import api
from date_operations.cli import main, parse_arguments
from date_operations.mcp_server import create_mcp_server


class TestMcpServer:
    """Tests for tool registration."""

    def test_registers_every_operation(self, service):
        mcp = create_mcp_server(operations=service)
        tools = asyncio.run(mcp.list_tools())

        assert {tool.name for tool in tools} == set(service.tool_names)

    def test_tools_have_descriptions(self, service):
        tools = asyncio.run(create_mcp_server(operations=service).list_tools())

        for tool in tools:
            assert tool.description


@pytest.fixture
def client(service, monkeypatch):
    """Create a TestClient whose app uses the test service."""
    monkeypatch.setattr(api, "service", service)
    return TestClient(api.app)


class TestRestApi:
    """Tests for the FastAPI endpoints."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root_lists_tools(self, client, service):
        assert client.get("/").json()["tools"] == service.tool_names

    def test_today(self, client):
        assert client.get("/today").json()["date"] == "2025-12-10"

    def test_run_tool(self, client):
        response = client.post(
            "/tools/get_next_working_day", json={"arguments": {"from_date": "2025-12-24"}}
        )

        assert response.status_code == 200
        assert response.json()["next_working_day"] == "2025-12-29"

    def test_unknown_tool_is_400(self, client):
        response = client.post("/tools/get_tomorrow", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Unknown tool: get_tomorrow"

    def test_invalid_date_is_400(self, client):
        response = client.get("/holidays/not-a-date")

        assert response.status_code == 400
        assert "Expected ISO format" in response.json()["detail"]

    def test_check_holiday(self, client):
        assert client.get("/holidays/2025-12-26").json()["is_bank_holiday"] is True

    def test_upcoming_holidays(self, client):
        data = client.get("/holidays/upcoming", params={"months_ahead": 1}).json()

        assert data["country"] == "GB"
        assert [h["date"] for h in data["holidays"]] == ["2025-12-25", "2025-12-26", "2026-01-01"]

    def test_upcoming_holidays_range_checked(self, client):
        assert client.get("/holidays/upcoming", params={"months_ahead": -1}).status_code == 422

    @pytest.mark.parametrize(
        "endpoint", ["today", "run_tool", "upcoming_holidays", "check_holiday"]
    )
    def test_holiday_endpoints_run_in_threadpool(self, endpoint):
        """Endpoints that may fetch holidays are sync so they do not block the event loop."""
        assert inspect.iscoroutinefunction(getattr(api, endpoint)) is False


class TestCli:
    """Tests for the click CLI."""

    def invoke(self, service, args):
        return CliRunner().invoke(main, args, obj={"service": service})

    def test_next(self, service):
        result = self.invoke(service, ["next", "2025-12-24"])

        assert result.exit_code == 0
        assert "2025-12-29" in result.output

    def test_add_backward(self, service):
        result = self.invoke(service, ["add", "2", "--start", "2025-12-30", "-d", "backward"])

        assert result.exit_code == 0
        assert "2025-12-24" in result.output

    def test_holidays(self, service):
        result = self.invoke(service, ["holidays", "--months", "1"])

        assert result.exit_code == 0
        assert "Boxing Day" in result.output

    def test_parse_due(self, service):
        result = self.invoke(service, ["parse-due", "in", "2", "weeks"])

        assert result.exit_code == 0
        assert "2025-12-29" in result.output

    def test_call(self, service):
        result = self.invoke(service, ["call", "is_bank_holiday", "date=2025-12-25"])

        assert result.exit_code == 0
        assert "True" in result.output

    def test_error_exits_1(self, service):
        result = self.invoke(service, ["next", "bogus"])

        assert result.exit_code == 1
        assert "Invalid date string" in result.output

    def test_parse_arguments(self):
        assert parse_arguments(["a=1", "b = x=y"]) == {"a": "1", "b": "x=y"}

    def test_parse_arguments_rejects_bare_value(self):
        import click

        with pytest.raises(click.BadParameter):
            parse_arguments(["oops"])
