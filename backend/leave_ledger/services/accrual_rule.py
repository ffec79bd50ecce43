# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leave_ledger.exceptions import ConflictError, InvalidInputError, NotFoundError
from leave_ledger.models.accrual_rule import LeaveAccrualRule
from leave_ledger.models.enums import AuditAction, AuditEntityType, LeaveType
from leave_ledger.schemas.accrual_rule import AccrualRuleListResponse, AccrualRuleResponse
from leave_ledger.schemas.audit import AuditEntryResponse, AuditHistoryResponse
from leave_ledger.services.audit import list_entity_history, record_rule_change, rule_snapshot

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.accrual_rule import CreateAccrualRuleRequest, UpdateAccrualRuleRequest
    from leave_ledger.schemas.auth import AuthContext


def _build_rule_response(rule: LeaveAccrualRule) -> AccrualRuleResponse:
    """Map an accrual rule model to its response schema."""
    return AccrualRuleResponse(
        id=rule.id,
        company_id=rule.company_id,
        leave_type=LeaveType(rule.leave_type),
        monthly_credit=float(rule.monthly_credit),
        max_annual_limit=float(rule.max_annual_limit) if rule.max_annual_limit is not None else None,
        is_active=rule.is_active,
        description=rule.description,
        created_by=rule.created_by,
        created_at=rule.created_at,
        updated_at=rule.updated_at,
    )


async def _get_rule(session: AsyncSession, company_id: uuid.UUID, rule_id: uuid.UUID) -> LeaveAccrualRule:
    result = await session.execute(
        select(LeaveAccrualRule).where(
            col(LeaveAccrualRule.id) == rule_id,
            col(LeaveAccrualRule.company_id) == company_id,
        )
    )
    rule = result.scalar_one_or_none()
    if rule is None:
        raise NotFoundError("Accrual rule not found")
    return rule


async def _ensure_no_active_rule(
    session: AsyncSession,
    company_id: uuid.UUID,
    leave_type: str,
    *,
    exclude_id: uuid.UUID | None = None,
) -> None:
    """Raise 409 if another active rule already covers this leave type."""
    filters = [
        col(LeaveAccrualRule.company_id) == company_id,
        col(LeaveAccrualRule.leave_type) == leave_type,
        col(LeaveAccrualRule.is_active).is_(True),
    ]
    if exclude_id is not None:
        filters.append(col(LeaveAccrualRule.id) != exclude_id)
    result = await session.execute(select(func.count()).select_from(LeaveAccrualRule).where(*filters))
    if result.scalar_one() > 0:
        raise ConflictError(f"An active accrual rule for '{leave_type}' already exists")


# ---------------------------------------------------------------------------
# Read path
# ---------------------------------------------------------------------------


async def list_active_rules(session: AsyncSession, company_id: uuid.UUID) -> list[LeaveAccrualRule]:
    """All active accrual rules for a tenant, the engine's read contract."""
    result = await session.execute(
        select(LeaveAccrualRule)
        .where(
            col(LeaveAccrualRule.company_id) == company_id,
            col(LeaveAccrualRule.is_active).is_(True),
        )
        .order_by(col(LeaveAccrualRule.created_at))
    )
    return list(result.scalars().all())


async def get_rule(session: AsyncSession, company_id: uuid.UUID, rule_id: uuid.UUID) -> AccrualRuleResponse:
    """Fetch a single accrual rule."""
    return _build_rule_response(await _get_rule(session, company_id, rule_id))


async def list_rules(
    session: AsyncSession,
    company_id: uuid.UUID,
    *,
    include_inactive: bool = False,
    offset: int = 0,
    limit: int = 50,
) -> AccrualRuleListResponse:
    """List a tenant's accrual rules, active ones only unless asked otherwise."""
    filters = [col(LeaveAccrualRule.company_id) == company_id]
    if not include_inactive:
        filters.append(col(LeaveAccrualRule.is_active).is_(True))

    count_result = await session.execute(select(func.count()).select_from(LeaveAccrualRule).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveAccrualRule)
        .where(*filters)
        .order_by(col(LeaveAccrualRule.leave_type), col(LeaveAccrualRule.created_at))
        .offset(offset)
        .limit(limit)
    )
    rules = list(result.scalars().all())
    return AccrualRuleListResponse(items=[_build_rule_response(r) for r in rules], total=total)


# ---------------------------------------------------------------------------
# Write path
# ---------------------------------------------------------------------------


async def create_rule(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreateAccrualRuleRequest,
) -> AccrualRuleResponse:
    """Create an active accrual rule for a leave type that has none."""
    await _ensure_no_active_rule(session, auth.company_id, payload.leave_type.value)

    rule = LeaveAccrualRule(
        company_id=auth.company_id,
        leave_type=payload.leave_type.value,
        monthly_credit=payload.monthly_credit,
        max_annual_limit=payload.max_annual_limit,
        description=payload.description,
        created_by=auth.user_id,
    )
    session.add(rule)
    await session.flush()
    record_rule_change(session, auth, rule, AuditAction.CREATE)

    await session.commit()
    await session.refresh(rule)
    return _build_rule_response(rule)


async def update_rule(
    session: AsyncSession,
    auth: AuthContext,
    rule_id: uuid.UUID,
    payload: UpdateAccrualRuleRequest,
) -> AccrualRuleResponse:
    """Apply a partial update. Reactivation re-checks the one-active-rule constraint."""
    rule = await _get_rule(session, auth.company_id, rule_id)
    before = rule_snapshot(rule)

    changes = payload.model_dump(exclude_unset=True)
    if changes.get("is_active") and not rule.is_active:
        await _ensure_no_active_rule(session, auth.company_id, rule.leave_type, exclude_id=rule.id)
    if "monthly_credit" in changes and changes["monthly_credit"] is None:
        raise InvalidInputError("monthly_credit cannot be null")

    for key, value in changes.items():
        setattr(rule, key, value)
    rule.updated_at = datetime.now(UTC)
    await session.flush()
    record_rule_change(session, auth, rule, AuditAction.UPDATE, before)

    await session.commit()
    await session.refresh(rule)
    return _build_rule_response(rule)


async def deactivate_rule(
    session: AsyncSession,
    auth: AuthContext,
    rule_id: uuid.UUID,
) -> None:
    """Soft-delete a rule so it stops contributing entitlement."""
    rule = await _get_rule(session, auth.company_id, rule_id)
    if not rule.is_active:
        return

    before = rule_snapshot(rule)
    rule.is_active = False
    rule.updated_at = datetime.now(UTC)
    await session.flush()
    record_rule_change(session, auth, rule, AuditAction.DEACTIVATE, before)
    await session.commit()


async def get_rule_history(session: AsyncSession, company_id: uuid.UUID, rule_id: uuid.UUID) -> AuditHistoryResponse:
    """Every recorded change to a rule, oldest first."""
    await _get_rule(session, company_id, rule_id)
    entries = await list_entity_history(session, company_id, AuditEntityType.ACCRUAL_RULE, rule_id)
    return AuditHistoryResponse(
        items=[
            AuditEntryResponse(
                id=entry.id,
                actor_id=entry.actor_id,
                action=AuditAction(entry.action),
                before=entry.before_json,
                after=entry.after_json,
                created_at=entry.created_at,
            )
            for entry in entries
        ],
        total=len(entries),
    )
