# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

from pydantic import BaseModel, Field

from leave_ledger.models.enums import LeaveType

# ---------------------------------------------------------------------------
# Leave balance
# ---------------------------------------------------------------------------


class TypeBalanceResponse(BaseModel):
    """Entitlement, consumption and remaining days for one leave type."""

    total: float
    used: float
    remaining: float


class LeaveBalanceResponse(BaseModel):
    """Per-type balances for an employee in the as-of calendar year.

    ``balances`` always contains ``annual``; ``lwp`` appears only when some
    consumption could not be covered.
    """

    employee_id: uuid.UUID
    year: int
    as_of: date
    months_eligible: int
    balances: dict[LeaveType, TypeBalanceResponse]


# ---------------------------------------------------------------------------
# Monthly ledger
# ---------------------------------------------------------------------------


class LedgerRowResponse(BaseModel):
    """Paid and unpaid leave days in one calendar month."""

    year_month: str = Field(pattern=r"^\d{4}-\d{2}$")
    paid_days: int = Field(ge=0)
    unpaid_days: int = Field(ge=0)


class MonthlyLedgerResponse(BaseModel):
    """Month-by-month paid/unpaid split for payroll."""

    employee_id: uuid.UUID
    start_date: date
    end_date: date
    rows: list[LedgerRowResponse]


# ---------------------------------------------------------------------------
# Accrual history
# ---------------------------------------------------------------------------


class MonthlyCreditResponse(BaseModel):
    """One rule's credit in one month."""

    year_month: str = Field(pattern=r"^\d{4}-\d{2}$")
    leave_type: LeaveType
    credit: float
    cumulative: float


class AccrualHistoryResponse(BaseModel):
    """Credits earned month by month in one calendar year, derived from the active rules.

    ``totals`` equals the ``total`` column of the leave balance for the same
    as-of date.
    """

    employee_id: uuid.UUID
    year: int
    as_of: date
    months_eligible: int
    entries: list[MonthlyCreditResponse]
    totals: dict[LeaveType, float]
