# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query

from leave_ledger.api.deps import AsOfDep, AuthDep, validate_company_scope
from leave_ledger.db import SessionDep
from leave_ledger.schemas.balance import AccrualHistoryResponse, LeaveBalanceResponse, MonthlyLedgerResponse
from leave_ledger.services import balance as balance_service

employee_leave_router = APIRouter(
    prefix="/companies/{company_id}/employees/{employee_id}",
    tags=["balances"],
    dependencies=[Depends(validate_company_scope)],
)


@employee_leave_router.get("/leave-balance", response_model=LeaveBalanceResponse)
async def get_leave_balance(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    as_of: AsOfDep,
) -> LeaveBalanceResponse:
    """Per-type total, used and remaining days for the as-of calendar year."""
    return await balance_service.get_leave_balance(session, auth.company_id, employee_id, as_of)


@employee_leave_router.get("/leave-ledger", response_model=MonthlyLedgerResponse)
async def get_monthly_ledger(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    as_of: AsOfDep,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> MonthlyLedgerResponse:
    """Paid and unpaid leave days per month, for payroll deductions.

    The window defaults to Jan 1 through the first of the as-of month and
    never extends past the as-of month.
    """
    return await balance_service.get_monthly_ledger(
        session, auth.company_id, employee_id, as_of, start_date=start_date, end_date=end_date
    )


@employee_leave_router.get("/accrual-history", response_model=AccrualHistoryResponse)
async def get_accrual_history(
    employee_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    as_of: AsOfDep,
    year: int | None = Query(default=None, ge=1900),
) -> AccrualHistoryResponse:
    """Month-by-month accrual credits for a calendar year (defaults to the as-of year)."""
    return await balance_service.get_accrual_history(session, auth.company_id, employee_id, as_of, year)
