# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel

from leave_ledger.models.enums import AuditAction


class AuditEntryResponse(BaseModel):
    """One recorded change to an accrual rule."""

    id: uuid.UUID
    actor_id: uuid.UUID
    action: AuditAction
    before: dict[str, Any] | None
    after: dict[str, Any] | None
    created_at: datetime


class AuditHistoryResponse(BaseModel):
    items: list[AuditEntryResponse]
    total: int
