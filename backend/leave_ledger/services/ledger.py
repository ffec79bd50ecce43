"""Monthly ledger distributor: paid and unpaid leave days per calendar month.

Each approved interval is classified as a whole against a single balance
snapshot, then its paid and unpaid days are apportioned to the months it
spans. Month shares are rounded independently, so the monthly figures may
differ from the interval total by one day per boundary month.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from leave_ledger.exceptions import InvalidInputError
from leave_ledger.models.enums import LeaveType
from leave_ledger.services.consumption import clip_interval, inclusive_days

if TYPE_CHECKING:
    from collections.abc import Iterable

    from leave_ledger.services.consumption import LeaveInterval
    from leave_ledger.services.reconciliation import ReconciliationResult

ZERO = Decimal(0)


@dataclass
class LedgerRow:
    """Paid and unpaid leave days falling in one calendar month."""

    year_month: str
    paid_days: int = 0
    unpaid_days: int = 0


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def month_end(day: date) -> date:
    """Last calendar day of ``day``'s month."""
    _, days_in_month = monthrange(day.year, day.month)
    return day.replace(day=days_in_month)


def month_keys(start: date, end: date) -> list[str]:
    """One ``YYYY-MM`` key per calendar month touched by ``[start, end]``, ascending."""
    keys: list[str] = []
    cursor = start.replace(day=1)
    while cursor <= end:
        keys.append(month_key(cursor))
        cursor = month_end(cursor) + timedelta(days=1)
    return keys


def resolve_window(
    as_of: date,
    start_date: date | None = None,
    end_date: date | None = None,
) -> tuple[date, date]:
    """Apply ledger window defaults.

    ``start_date`` defaults to Jan 1 of the as-of year. ``end_date`` defaults
    to, and is capped at, the first day of the as-of month so future months
    never appear.
    """
    if start_date is not None and end_date is not None and start_date > end_date:
        msg = f"start_date {start_date} is after end_date {end_date}"
        raise InvalidInputError(msg)

    start = start_date if start_date is not None else date(as_of.year, 1, 1)
    current_month = as_of.replace(day=1)
    end = min(end_date, current_month) if end_date is not None else current_month

    if start > end:
        msg = f"Ledger window starting {start} lies after the current month ({current_month})"
        raise InvalidInputError(msg)
    return start, end


def split_by_month(start: date, end: date) -> list[tuple[str, int]]:
    """Break ``[start, end]`` into (month key, day count) segments."""
    segments: list[tuple[str, int]] = []
    cursor = start
    while cursor <= end:
        segment_end = min(month_end(cursor), end)
        segments.append((month_key(cursor), inclusive_days(cursor, segment_end)))
        cursor = segment_end + timedelta(days=1)
    return segments


def classify_interval(
    leave_type: LeaveType,
    total_days: int,
    reconciliation: ReconciliationResult,
) -> tuple[Decimal, Decimal]:
    """Return (paid, unpaid) days for a whole interval.

    The balance snapshot is read as-is; it is not reduced by earlier
    intervals classified in the same ledger call.
    """
    days = Decimal(total_days)
    if leave_type.is_unpaid or not reconciliation.has_bucket(leave_type):
        return ZERO, days

    available = reconciliation.remaining(LeaveType.ANNUAL)
    if leave_type is not LeaveType.ANNUAL:
        available += reconciliation.remaining(leave_type)

    if days <= available:
        return days, ZERO
    paid = max(ZERO, available)
    return paid, days - paid


def _round_share(amount: Decimal, segment_days: int, total_days: int) -> int:
    share = amount * Decimal(segment_days) / Decimal(total_days)
    return int(share.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def distribute_monthly(
    intervals: Iterable[LeaveInterval],
    window_start: date,
    window_end: date,
    reconciliation: ReconciliationResult,
) -> list[LedgerRow]:
    """Build zero-filled ledger rows for every month in the window."""
    rows = {key: LedgerRow(year_month=key) for key in month_keys(window_start, window_end)}
    clip_end = month_end(window_end)

    for interval in intervals:
        clipped = clip_interval(interval.start_date, interval.end_date, window_start, clip_end)
        if clipped is None:
            continue
        total_days = inclusive_days(*clipped)
        paid, unpaid = classify_interval(interval.leave_type, total_days, reconciliation)

        for key, segment_days in split_by_month(*clipped):
            row = rows[key]
            row.paid_days += _round_share(paid, segment_days, total_days)
            row.unpaid_days += _round_share(unpaid, segment_days, total_days)

    return list(rows.values())
