# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from leave_ledger.models.enums import LeaveType


class CreateAccrualRuleRequest(BaseModel):
    """Request body for configuring a leave type's monthly accrual."""

    leave_type: LeaveType
    monthly_credit: Decimal = Field(ge=0, max_digits=5, decimal_places=2)
    max_annual_limit: Decimal | None = Field(default=None, ge=0, max_digits=6, decimal_places=2)
    description: str | None = Field(default=None, max_length=1000)

    @field_validator("leave_type")
    @classmethod
    def _reject_unpaid_type(cls, value: LeaveType) -> LeaveType:
        if not value.is_accruable:
            msg = f"Leave type '{value}' is unpaid and cannot accrue"
            raise ValueError(msg)
        return value


class UpdateAccrualRuleRequest(BaseModel):
    """Partial update; omitted fields keep their current value.

    ``max_annual_limit`` may be set to null explicitly to remove the cap.
    """

    monthly_credit: Decimal | None = Field(default=None, ge=0, max_digits=5, decimal_places=2)
    max_annual_limit: Decimal | None = Field(default=None, ge=0, max_digits=6, decimal_places=2)
    description: str | None = Field(default=None, max_length=1000)
    is_active: bool | None = None

    @model_validator(mode="after")
    def _require_change(self) -> Self:
        if not self.model_fields_set:
            msg = "At least one field must be provided"
            raise ValueError(msg)
        return self


class AccrualRuleResponse(BaseModel):
    """Response schema for an accrual rule."""

    id: uuid.UUID
    company_id: uuid.UUID
    leave_type: LeaveType
    monthly_credit: float
    max_annual_limit: float | None
    is_active: bool
    description: str | None
    created_by: uuid.UUID
    created_at: datetime
    updated_at: datetime


class AccrualRuleListResponse(BaseModel):
    """Paginated accrual rules."""

    items: list[AccrualRuleResponse]
    total: int
