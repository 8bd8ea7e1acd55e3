"""
Sprint boundary arithmetic.
"""

from datetime import date, timedelta

from date_operations.data.schemas import SprintDates, SprintInfo


def _validate_length(length_weeks: int) -> None:
    if length_weeks < 1:
        raise ValueError("sprint_length_weeks must be at least 1")


def sprint_dates(start: date, length_weeks: int) -> SprintDates:
    """
    Calculate the start and end of a sprint.

    The end is the day before the next sprint would start.
    """
    _validate_length(length_weeks)
    end = start + timedelta(weeks=length_weeks) - timedelta(days=1)
    return SprintDates(start=start, end=end, length_weeks=length_weeks)


def current_sprint_info(first_sprint_start: date, length_weeks: int, today: date) -> SprintInfo:
    """
    Locate ``today`` within a recurring sprint schedule.

    Before the first sprint the same floor arithmetic applies: the sprint
    number drops to zero or below, ``days_into_sprint`` stays within
    [0, sprint length) and ``has_started`` is False.

    Args:
        first_sprint_start: Day sprint 1 started.
        length_weeks: Sprint length in weeks.
        today: Current calendar date in the configured timezone.

    Returns:
        SprintInfo describing the sprint containing today.
    """
    _validate_length(length_weeks)

    sprint_length_days = length_weeks * 7
    days_elapsed = (today - first_sprint_start).days

    sprint_number = days_elapsed // sprint_length_days + 1
    days_into_sprint = days_elapsed % sprint_length_days
    days_remaining = sprint_length_days - days_into_sprint

    current_start = first_sprint_start + timedelta(days=(sprint_number - 1) * sprint_length_days)
    current_end = current_start + timedelta(days=sprint_length_days - 1)

    return SprintInfo(
        sprint_number=sprint_number,
        days_into_sprint=days_into_sprint,
        days_remaining=days_remaining,
        current_sprint_start=current_start,
        current_sprint_end=current_end,
        has_started=days_elapsed >= 0,
    )
