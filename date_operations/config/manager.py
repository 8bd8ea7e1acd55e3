"""
Configuration manager for loading and validating settings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from date_operations.data.country_data import (
    DEFAULT_DUE_HOUR,
    timezone_for_country,
)
from date_operations.data.schemas import Config

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages configuration loading from YAML files and environment variables."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config manager.

        Args:
            config_path: Optional path to config file. If not provided, uses default.
        """
        self.config_path = config_path or self._get_default_config_path()

    def _get_default_config_path(self) -> str:
        """Get the default configuration file path."""
        package_dir = Path(__file__).parent.parent
        return str(package_dir / "config" / "settings.yaml")

    def load_config(self) -> Config:
        """
        Load configuration from YAML file with environment variable overrides.

        Returns:
            Config: Validated, immutable configuration object.

        Raises:
            ValueError: If config is invalid.
        """
        # 1. Load from YAML file
        config_dict = self._load_yaml()

        # 2. Apply environment variable overrides
        config_dict = self._apply_env_overrides(config_dict)

        # 3. Resolve derived and clamped values
        config_dict = self._resolve(config_dict)

        # 4. Validate and create Config object
        try:
            return Config(**config_dict)
        except Exception as e:
            raise ValueError(f"Invalid configuration: {e}")

    def _load_yaml(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        config_path = Path(self.config_path)

        if not config_path.exists():
            logger.debug(f"Config file not found: {config_path}, using defaults")
            return {}

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
                logger.debug(f"Loaded config from: {config_path}")
                return self._flatten_config(config) if config else {}
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing YAML config file: {e}")

    def _flatten_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Flatten nested YAML config to match Config model fields.

        Args:
            config: Nested configuration dictionary.

        Returns:
            Flattened configuration dictionary.
        """
        result = {}

        # Handle holidays section
        if "holidays" in config:
            hol = config["holidays"] or {}
            if "country" in hol:
                result["holiday_country"] = hol["country"]
            if "source" in hol:
                result["holiday_source"] = hol["source"]
            if "cache_ttl_hours" in hol:
                result["cache_ttl_hours"] = hol["cache_ttl_hours"]
            if "request_timeout" in hol:
                result["request_timeout"] = hol["request_timeout"]

        # Handle schedule section
        if "schedule" in config:
            sched = config["schedule"] or {}
            if "timezone" in sched:
                result["timezone"] = sched["timezone"]
            if "due_hour" in sched:
                result["due_hour"] = sched["due_hour"]

        # Handle API section
        if "api" in config:
            api = config["api"] or {}
            if "host" in api:
                result["api_host"] = api["host"]
            if "port" in api:
                result["api_port"] = api["port"]

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides to configuration.

        Environment variables:
        - BANK_HOLIDAY_COUNTRY -> holiday_country
        - TIMEZONE -> timezone
        - ASANA_DUE_HOUR -> due_hour (validated later, kept as raw string)
        - DATE_OPS_HOLIDAY_SOURCE -> holiday_source
        - DATE_OPS_CACHE_TTL_HOURS -> cache_ttl_hours
        - DATE_OPS_REQUEST_TIMEOUT -> request_timeout
        - DATE_OPS_API_HOST -> api_host
        - DATE_OPS_API_PORT -> api_port

        Args:
            config_dict: Configuration dictionary from YAML.

        Returns:
            Updated configuration dictionary.
        """
        env_mappings = {
            "BANK_HOLIDAY_COUNTRY": "holiday_country",
            "TIMEZONE": "timezone",
            "ASANA_DUE_HOUR": "due_hour",
            "DATE_OPS_HOLIDAY_SOURCE": "holiday_source",
            "DATE_OPS_CACHE_TTL_HOURS": ("cache_ttl_hours", float),
            "DATE_OPS_REQUEST_TIMEOUT": ("request_timeout", float),
            "DATE_OPS_API_HOST": "api_host",
            "DATE_OPS_API_PORT": ("api_port", int),
        }

        for env_var, mapping in env_mappings.items():
            env_value = os.environ.get(env_var)
            if env_value is None or env_value == "":
                continue
            if isinstance(mapping, tuple):
                config_key, type_converter = mapping
                try:
                    config_dict[config_key] = type_converter(env_value)
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_var}: {env_value!r}")
                    continue
            else:
                config_key = mapping
                config_dict[config_key] = env_value
            logger.debug(f"Override from env: {env_var} -> {config_key}")

        return config_dict

    def _resolve(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize country, pick a timezone and clamp the due hour."""
        country = str(config_dict.get("holiday_country") or "NONE").strip().upper()
        config_dict["holiday_country"] = country or "NONE"

        config_dict["timezone"] = self._resolve_timezone(
            config_dict.get("timezone"), config_dict["holiday_country"]
        )
        config_dict["due_hour"] = self._resolve_due_hour(config_dict.get("due_hour"))

        if "holiday_source" in config_dict:
            config_dict["holiday_source"] = str(config_dict["holiday_source"]).lower()

        return config_dict

    def _resolve_timezone(self, explicit: Optional[str], country: str) -> str:
        """
        Choose the timezone: explicit override, then country default.

        Unknown zone names fall back to the country default with a warning.
        """
        fallback = timezone_for_country(country)
        if not explicit:
            return fallback

        try:
            ZoneInfo(explicit)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone: {explicit}. Using default: {fallback}")
            return fallback
        return explicit

    def _resolve_due_hour(self, raw: Any) -> int:
        """Parse and clamp the due hour to 0-23."""
        if raw is None or raw == "":
            return DEFAULT_DUE_HOUR

        try:
            hour = int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid ASANA_DUE_HOUR: {raw}. Using default: {DEFAULT_DUE_HOUR}")
            return DEFAULT_DUE_HOUR

        if hour < 0 or hour > 23:
            clamped = max(0, min(23, hour))
            logger.warning(f"Invalid ASANA_DUE_HOUR: {raw}. Clamped to: {clamped}")
            return clamped
        return hour


def describe(config: Config) -> None:
    """Log the resolved configuration."""
    logger.info("Date Operations MCP Configuration:")
    logger.info(f"  Country: {config.holiday_country}")
    logger.info(f"  Timezone: {config.timezone}")
    logger.info(f"  Due Hour: {config.due_hour}:00")
    logger.info(
        "  Bank Holidays: "
        + (f"Enabled ({config.holiday_source.value})" if config.holidays_enabled else "Disabled (weekends only)")
    )

