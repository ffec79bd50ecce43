"""Consumption aggregator: approved leave days per type inside a calendar year."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from leave_ledger.exceptions import InvalidInputError
from leave_ledger.models.enums import LeaveType

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class LeaveInterval:
    """An approved leave spanning ``start_date`` to ``end_date`` inclusive."""

    leave_type: LeaveType
    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            msg = f"Leave interval ends ({self.end_date}) before it starts ({self.start_date})"
            raise InvalidInputError(msg)


def year_window(year: int) -> tuple[date, date]:
    """Return (Jan 1, Dec 31) of ``year``."""
    return date(year, 1, 1), date(year, 12, 31)


def clip_interval(
    start: date,
    end: date,
    window_start: date,
    window_end: date,
) -> tuple[date, date] | None:
    """Intersect ``[start, end]`` with the window, or None if they do not overlap."""
    clipped_start = max(start, window_start)
    clipped_end = min(end, window_end)
    if clipped_end < clipped_start:
        return None
    return clipped_start, clipped_end


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days from start to end, counting both."""
    return (end - start).days + 1


def aggregate_consumption(intervals: Iterable[LeaveInterval], year: int) -> dict[LeaveType, int]:
    """Sum in-year days per leave type. Types with no usage are absent."""
    window_start, window_end = year_window(year)
    used: dict[LeaveType, int] = {}
    for interval in intervals:
        clipped = clip_interval(interval.start_date, interval.end_date, window_start, window_end)
        if clipped is None:
            continue
        used[interval.leave_type] = used.get(interval.leave_type, 0) + inclusive_days(*clipped)
    return used
