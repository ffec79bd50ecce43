"""Accrual calculator: eligible months and entitlement-to-date per leave type.

Pure functions only. The as-of date is always passed in by the caller so the
results are deterministic for a given set of inputs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

from leave_ledger.models.enums import LeaveType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from leave_ledger.models.accrual_rule import LeaveAccrualRule

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def quantize_days(value: Decimal) -> Decimal:
    """Round a day amount to 2 decimal places, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def accrual_start(joining_date: date, as_of: date) -> date:
    """First day that counts towards accrual in the as-of year.

    Joining mid-month still earns that month's credit, so the join date is
    floored to the first of its month before comparing with Jan 1.
    """
    return max(joining_date.replace(day=1), date(as_of.year, 1, 1))


def months_eligible(joining_date: date, as_of: date) -> int:
    """Inclusive count of calendar months from accrual start to the as-of date."""
    start = accrual_start(joining_date, as_of)
    if start > as_of:
        return 0
    return (as_of.year - start.year) * 12 + (as_of.month - start.month) + 1


def compute_rule_total(
    monthly_credit: Decimal,
    months: int,
    max_annual_limit: Decimal | None = None,
) -> Decimal:
    """Entitlement earned over ``months`` at ``monthly_credit``, capped when a limit is set."""
    total = quantize_days(Decimal(months) * Decimal(monthly_credit))
    if max_annual_limit is not None:
        total = min(total, Decimal(max_annual_limit))
    return total


def compute_entitlements(
    rules: Iterable[LeaveAccrualRule],
    joining_date: date,
    as_of: date,
) -> dict[LeaveType, Decimal]:
    """Entitlement-to-date for every active rule, keyed by leave type."""
    months = months_eligible(joining_date, as_of)
    totals: dict[LeaveType, Decimal] = {}
    for rule in rules:
        if not rule.is_active:
            continue
        leave_type = LeaveType(rule.leave_type)
        if leave_type in totals:
            logger.warning("Duplicate active accrual rule for %s in company %s", leave_type, rule.company_id)
        totals[leave_type] = compute_rule_total(rule.monthly_credit, months, rule.max_annual_limit)
    return totals


@dataclass(frozen=True)
class MonthlyCredit:
    """Credit one rule granted in one month, with the year-to-date total after it."""

    year_month: str
    leave_type: LeaveType
    credit: Decimal
    cumulative: Decimal


def credit_schedule(
    rules: Iterable[LeaveAccrualRule],
    joining_date: date,
    as_of: date,
) -> list[MonthlyCredit]:
    """Month-by-month credits behind ``compute_entitlements``, ordered by month then type.

    Each month's cumulative value equals ``compute_rule_total`` for the months
    elapsed so far, so the cap shows up as a short or zero credit in the month
    it is reached and the final cumulative always matches the entitlement.
    """
    start = accrual_start(joining_date, as_of)
    months = months_eligible(joining_date, as_of)
    active = sorted(
        (rule for rule in rules if rule.is_active),
        key=lambda rule: list(LeaveType).index(LeaveType(rule.leave_type)),
    )

    schedule: list[MonthlyCredit] = []
    previous = {rule.id: Decimal(0) for rule in active}
    for offset in range(months):
        month_index = start.month - 1 + offset
        year_month = f"{start.year + month_index // 12:04d}-{month_index % 12 + 1:02d}"
        for rule in active:
            cumulative = compute_rule_total(rule.monthly_credit, offset + 1, rule.max_annual_limit)
            schedule.append(
                MonthlyCredit(
                    year_month=year_month,
                    leave_type=LeaveType(rule.leave_type),
                    credit=cumulative - previous[rule.id],
                    cumulative=cumulative,
                )
            )
            previous[rule.id] = cumulative
    return schedule
