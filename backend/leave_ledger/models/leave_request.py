# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import TimestampMixin, UUIDBase
from leave_ledger.models.enums import LeaveStatus


class LeaveRequest(UUIDBase, TimestampMixin, table=True):
    """A leave request as recorded by the approval workflow.

    Only rows in APPROVED status feed balance and ledger computations.
    """

    __tablename__ = "leave_request"
    __table_args__ = (
        sa.Index("ix_leave_request_company_status", "company_id", "status"),
        sa.Index("ix_leave_request_employee_dates", "employee_id", "start_date", "end_date"),
    )

    company_id: uuid.UUID = Field(index=True)
    employee_id: uuid.UUID = Field(index=True)
    leave_type: str = Field(max_length=50)
    start_date: date
    end_date: date
    status: str = Field(default=LeaveStatus.PENDING, max_length=50, sa_column_kwargs={"server_default": "pending"})
    reason: str | None = None
