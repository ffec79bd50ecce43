"""Audit trail for accrual-rule changes.

Entries are added to the caller's session and committed together with the
change they describe.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.models.audit import AuditLog
from leave_ledger.models.enums import AuditEntityType

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.models.accrual_rule import LeaveAccrualRule
    from leave_ledger.models.enums import AuditAction
    from leave_ledger.schemas.auth import AuthContext


def _json_safe(value: Any) -> Any:
    if isinstance(value, uuid.UUID | Decimal):
        return str(value)
    if isinstance(value, datetime | date):
        return value.isoformat()
    return value


def rule_snapshot(rule: LeaveAccrualRule) -> dict[str, Any]:
    """Capture a rule's current column values as JSON."""
    return {key: _json_safe(value) for key, value in rule.model_dump().items()}


def record_rule_change(
    session: AsyncSession,
    auth: AuthContext,
    rule: LeaveAccrualRule,
    action: AuditAction,
    before: dict[str, Any] | None = None,
) -> AuditLog:
    """Stage an audit entry for ``rule`` as it stands now."""
    entry = AuditLog(
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.ACCRUAL_RULE.value,
        entity_id=rule.id,
        action=action.value,
        before_json=before,
        after_json=rule_snapshot(rule),
    )
    session.add(entry)
    return entry


async def list_entity_history(
    session: AsyncSession,
    company_id: uuid.UUID,
    entity_type: AuditEntityType,
    entity_id: uuid.UUID,
) -> list[AuditLog]:
    result = await session.execute(
        select(AuditLog)
        .where(
            col(AuditLog.company_id) == company_id,
            col(AuditLog.entity_type) == entity_type.value,
            col(AuditLog.entity_id) == entity_id,
        )
        .order_by(col(AuditLog.created_at))
    )
    return list(result.scalars().all())
