"""Tests for the accrual calculator: eligible months, rounding, caps, and rule selection."""

from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import pytest

from leave_ledger.models.accrual_rule import LeaveAccrualRule
from leave_ledger.models.enums import LeaveType
from leave_ledger.services.accrual import (
    accrual_start,
    compute_entitlements,
    compute_rule_total,
    credit_schedule,
    months_eligible,
    quantize_days,
)

COMPANY_ID = uuid.uuid4()
USER_ID = uuid.uuid4()


def _rule(
    leave_type: LeaveType,
    monthly_credit: str,
    max_annual_limit: str | None = None,
    *,
    is_active: bool = True,
) -> LeaveAccrualRule:
    return LeaveAccrualRule(
        company_id=COMPANY_ID,
        leave_type=leave_type.value,
        monthly_credit=Decimal(monthly_credit),
        max_annual_limit=Decimal(max_annual_limit) if max_annual_limit is not None else None,
        is_active=is_active,
        created_by=USER_ID,
    )


# ---------------------------------------------------------------------------
# Eligible months
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("joining_date", "as_of", "expected"),
    [
        (date(2026, 1, 1), date(2026, 7, 1), 7),
        (date(2020, 5, 10), date(2026, 3, 15), 3),
        (date(2026, 4, 20), date(2026, 7, 1), 4),
        (date(2026, 7, 20), date(2026, 7, 5), 1),
        (date(2026, 9, 1), date(2026, 7, 1), 0),
        (date(2019, 1, 1), date(2026, 12, 31), 12),
    ],
)
def test_months_eligible(joining_date: date, as_of: date, expected: int) -> None:
    assert months_eligible(joining_date, as_of) == expected


def test_accrual_start_floors_join_date_to_month() -> None:
    assert accrual_start(date(2026, 4, 20), date(2026, 7, 1)) == date(2026, 4, 1)


def test_accrual_start_resets_at_year_boundary() -> None:
    assert accrual_start(date(2023, 8, 15), date(2026, 2, 1)) == date(2026, 1, 1)


# ---------------------------------------------------------------------------
# Per-rule totals
# ---------------------------------------------------------------------------


def test_seven_months_at_one_sixty_seven() -> None:
    assert compute_rule_total(Decimal("1.67"), 7) == Decimal("11.69")


def test_total_rounds_half_up() -> None:
    assert compute_rule_total(Decimal("0.335"), 3) == Decimal("1.01")


def test_total_capped_by_annual_limit() -> None:
    assert compute_rule_total(Decimal("2.5"), 12, Decimal("20")) == Decimal("20")


def test_total_under_cap_is_uncapped() -> None:
    assert compute_rule_total(Decimal("1.5"), 4, Decimal("20")) == Decimal("6.00")


def test_zero_months_earns_nothing() -> None:
    assert compute_rule_total(Decimal("1.67"), 0) == Decimal("0.00")


def test_quantize_days_two_places() -> None:
    assert quantize_days(Decimal("10.185")) == Decimal("10.19")
    assert quantize_days(Decimal("3")) == Decimal("3.00")


# ---------------------------------------------------------------------------
# Entitlements across rules
# ---------------------------------------------------------------------------


def test_entitlements_keyed_by_type() -> None:
    rules = [_rule(LeaveType.ANNUAL, "1.67"), _rule(LeaveType.SICK, "0.5")]
    totals = compute_entitlements(rules, date(2026, 1, 1), date(2026, 7, 1))
    assert totals == {LeaveType.ANNUAL: Decimal("11.69"), LeaveType.SICK: Decimal("3.50")}


def test_entitlements_skip_inactive_rules() -> None:
    rules = [_rule(LeaveType.ANNUAL, "1.67"), _rule(LeaveType.CASUAL, "1", is_active=False)]
    totals = compute_entitlements(rules, date(2026, 1, 1), date(2026, 7, 1))
    assert LeaveType.CASUAL not in totals


def test_entitlements_zero_when_joining_after_as_of() -> None:
    totals = compute_entitlements([_rule(LeaveType.ANNUAL, "1.67")], date(2026, 9, 1), date(2026, 7, 1))
    assert totals == {LeaveType.ANNUAL: Decimal("0.00")}


def test_entitlements_apply_cap() -> None:
    totals = compute_entitlements([_rule(LeaveType.SICK, "2", "10")], date(2025, 1, 1), date(2026, 12, 1))
    assert totals[LeaveType.SICK] == Decimal("10")


def test_no_rules_no_entitlements() -> None:
    assert compute_entitlements([], date(2026, 1, 1), date(2026, 7, 1)) == {}


# ---------------------------------------------------------------------------
# Monthly credit schedule
# ---------------------------------------------------------------------------


def test_schedule_orders_by_month_then_type() -> None:
    rules = [_rule(LeaveType.SICK, "0.5"), _rule(LeaveType.ANNUAL, "1.67")]
    schedule = credit_schedule(rules, date(2026, 1, 1), date(2026, 3, 15))

    assert [(e.year_month, e.leave_type) for e in schedule] == [
        ("2026-01", LeaveType.ANNUAL),
        ("2026-01", LeaveType.SICK),
        ("2026-02", LeaveType.ANNUAL),
        ("2026-02", LeaveType.SICK),
        ("2026-03", LeaveType.ANNUAL),
        ("2026-03", LeaveType.SICK),
    ]
    assert schedule[-2].cumulative == Decimal("5.01")


def test_schedule_shows_cap_as_short_credit() -> None:
    schedule = credit_schedule([_rule(LeaveType.SICK, "2", "5")], date(2026, 1, 1), date(2026, 4, 1))

    assert [e.credit for e in schedule] == [Decimal(2), Decimal(2), Decimal(1), Decimal(0)]
    assert [e.cumulative for e in schedule] == [Decimal(2), Decimal(4), Decimal(5), Decimal(5)]


def test_schedule_starts_at_joining_month() -> None:
    schedule = credit_schedule([_rule(LeaveType.ANNUAL, "1.5")], date(2026, 4, 20), date(2026, 6, 1))
    assert [e.year_month for e in schedule] == ["2026-04", "2026-05", "2026-06"]


def test_schedule_sums_to_entitlement() -> None:
    rules = [_rule(LeaveType.ANNUAL, "1.67"), _rule(LeaveType.CASUAL, "0.75", "6"), _rule(LeaveType.SICK, "1")]
    joining_date, as_of = date(2023, 5, 9), date(2026, 11, 2)

    schedule = credit_schedule(rules, joining_date, as_of)
    totals = compute_entitlements(rules, joining_date, as_of)

    for leave_type, total in totals.items():
        assert sum((e.credit for e in schedule if e.leave_type is leave_type), Decimal(0)) == total


def test_schedule_skips_inactive_and_empty_years() -> None:
    rules = [_rule(LeaveType.ANNUAL, "1.67"), _rule(LeaveType.SICK, "1", is_active=False)]
    assert {e.leave_type for e in credit_schedule(rules, date(2026, 1, 1), date(2026, 2, 1))} == {LeaveType.ANNUAL}
    assert credit_schedule(rules, date(2026, 9, 1), date(2026, 7, 1)) == []
