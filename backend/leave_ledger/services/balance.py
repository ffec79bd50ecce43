"""Leave balance and monthly ledger queries.

Collaborator data (employee, active accrual rules, approved leave) is loaded
first; the accrual, consumption, reconciliation and ledger steps then run as
pure functions over that snapshot. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from leave_ledger.exceptions import InvalidInputError, PrerequisiteMissingError
from leave_ledger.models.enums import LeaveType
from leave_ledger.schemas.balance import (
    AccrualHistoryResponse,
    LeaveBalanceResponse,
    LedgerRowResponse,
    MonthlyCreditResponse,
    MonthlyLedgerResponse,
    TypeBalanceResponse,
)
from leave_ledger.services.accrual import compute_entitlements, credit_schedule, months_eligible
from leave_ledger.services.accrual_rule import list_active_rules
from leave_ledger.services.consumption import aggregate_consumption, year_window
from leave_ledger.services.employee import get_employee_directory
from leave_ledger.services.leave_request import list_approved_intervals
from leave_ledger.services.ledger import distribute_monthly, month_end, resolve_window
from leave_ledger.services.reconciliation import ReconciliationResult, reconcile

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.models.accrual_rule import LeaveAccrualRule
    from leave_ledger.services.consumption import LeaveInterval

logger = logging.getLogger(__name__)


async def _require_joining_date(company_id: uuid.UUID, employee_id: uuid.UUID) -> date:
    """Fetch the employee's joining date, failing fast if the employee or the date is missing."""
    employee = await get_employee_directory().get_employee(company_id, employee_id)
    if employee is None:
        raise PrerequisiteMissingError("Employee not found")
    if employee.joining_date is None:
        raise PrerequisiteMissingError("Employee has no joining date")
    return employee.joining_date


async def _require_rules(session: AsyncSession, company_id: uuid.UUID) -> list[LeaveAccrualRule]:
    rules = await list_active_rules(session, company_id)
    if not rules:
        raise PrerequisiteMissingError("No active accrual rules configured for this company")
    return rules


async def _reconcile_year(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    joining_date: date,
    as_of: date,
) -> tuple[ReconciliationResult, int]:
    """Run accrual, consumption and the borrowing cascade for the as-of year."""
    rules = await _require_rules(session, company_id)
    window_start, window_end = year_window(as_of.year)
    intervals = await list_approved_intervals(
        session, company_id, employee_id, start_date=window_start, end_date=window_end
    )

    totals = compute_entitlements(rules, joining_date, as_of)
    used = aggregate_consumption(intervals, as_of.year)
    return reconcile(totals, used), months_eligible(joining_date, as_of)


async def get_leave_balance(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    as_of: date,
) -> LeaveBalanceResponse:
    """Per-type total/used/remaining for the employee's as-of calendar year."""
    joining_date = await _require_joining_date(company_id, employee_id)
    reconciliation, months = await _reconcile_year(session, company_id, employee_id, joining_date, as_of)

    balances = reconciliation.rounded_balances()
    return LeaveBalanceResponse(
        employee_id=employee_id,
        year=as_of.year,
        as_of=as_of,
        months_eligible=months,
        balances={
            leave_type: TypeBalanceResponse(
                total=float(balances[leave_type].total),
                used=float(balances[leave_type].used),
                remaining=float(balances[leave_type].remaining),
            )
            for leave_type in LeaveType
            if leave_type in balances
        },
    )


async def get_monthly_ledger(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    as_of: date,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
) -> MonthlyLedgerResponse:
    """Paid/unpaid leave days per month over the requested window, for payroll."""
    window_start, window_end = resolve_window(as_of, start_date, end_date)
    joining_date = await _require_joining_date(company_id, employee_id)
    reconciliation, _ = await _reconcile_year(session, company_id, employee_id, joining_date, as_of)

    intervals: list[LeaveInterval] = await list_approved_intervals(
        session, company_id, employee_id, start_date=window_start, end_date=month_end(window_end)
    )
    rows = distribute_monthly(intervals, window_start, window_end, reconciliation)

    logger.debug(
        "Ledger for employee=%s %s..%s: %d intervals, lwp=%s",
        employee_id,
        window_start,
        window_end,
        len(intervals),
        reconciliation.lwp,
    )
    return MonthlyLedgerResponse(
        employee_id=employee_id,
        start_date=window_start,
        end_date=window_end,
        rows=[
            LedgerRowResponse(year_month=row.year_month, paid_days=row.paid_days, unpaid_days=row.unpaid_days)
            for row in rows
        ],
    )


def _history_as_of(as_of: date, year: int | None) -> date:
    """Past years are reported through Dec 31; the current year through ``as_of``."""
    if year is None or year == as_of.year:
        return as_of
    if year > as_of.year:
        msg = f"Accrual history for {year} lies after {as_of}"
        raise InvalidInputError(msg)
    return date(year, 12, 31)


async def get_accrual_history(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    as_of: date,
    year: int | None = None,
) -> AccrualHistoryResponse:
    """Monthly credits for one calendar year, recomputed from the currently active rules.

    Nothing is stored per month, so a rule changed mid-year is applied to the
    whole year, the same way the balance computes it.
    """
    history_as_of = _history_as_of(as_of, year)
    joining_date = await _require_joining_date(company_id, employee_id)
    rules = await _require_rules(session, company_id)

    schedule = credit_schedule(rules, joining_date, history_as_of)
    totals = compute_entitlements(rules, joining_date, history_as_of)
    return AccrualHistoryResponse(
        employee_id=employee_id,
        year=history_as_of.year,
        as_of=history_as_of,
        months_eligible=months_eligible(joining_date, history_as_of),
        entries=[
            MonthlyCreditResponse(
                year_month=entry.year_month,
                leave_type=entry.leave_type,
                credit=float(entry.credit),
                cumulative=float(entry.cumulative),
            )
            for entry in schedule
        ],
        totals={leave_type: float(totals[leave_type]) for leave_type in LeaveType if leave_type in totals},
    )
