# ruff: noqa: TC003
from __future__ import annotations

import uuid
from decimal import Decimal

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import TimestampMixin, UpdatedAtMixin, UUIDBase


class LeaveAccrualRule(UUIDBase, TimestampMixin, UpdatedAtMixin, table=True):
    """Monthly credit rate for one leave type within a tenant.

    At most one active rule exists per (company_id, leave_type); the
    accrual-rule service enforces this on every write.
    """

    __tablename__ = "leave_accrual_rule"
    __table_args__ = (sa.Index("ix_accrual_rule_company_type", "company_id", "leave_type"),)

    company_id: uuid.UUID = Field(index=True)
    leave_type: str = Field(max_length=50)
    monthly_credit: Decimal = Field(default=Decimal(0), max_digits=5, decimal_places=2)
    max_annual_limit: Decimal | None = Field(default=None, max_digits=6, decimal_places=2)
    is_active: bool = Field(default=True, sa_column_kwargs={"server_default": sa.true()})
    description: str | None = Field(default=None, max_length=1000)
    created_by: uuid.UUID
