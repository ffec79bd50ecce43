# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from leave_ledger.api.deps import AdminDep, AuthDep, validate_company_scope
from leave_ledger.db import SessionDep
from leave_ledger.schemas.accrual_rule import (
    AccrualRuleListResponse,
    AccrualRuleResponse,
    CreateAccrualRuleRequest,
    UpdateAccrualRuleRequest,
)
from leave_ledger.schemas.audit import AuditHistoryResponse
from leave_ledger.services import accrual_rule as accrual_rule_service

accrual_rules_router = APIRouter(
    prefix="/companies/{company_id}/accrual-rules",
    tags=["accrual-rules"],
    dependencies=[Depends(validate_company_scope)],
)


@accrual_rules_router.post("", response_model=AccrualRuleResponse, status_code=status.HTTP_201_CREATED)
async def create_accrual_rule(
    payload: CreateAccrualRuleRequest,
    session: SessionDep,
    auth: AdminDep,
) -> AccrualRuleResponse:
    """Configure monthly accrual for a leave type (admin only)."""
    return await accrual_rule_service.create_rule(session, auth, payload)


@accrual_rules_router.get("", response_model=AccrualRuleListResponse)
async def list_accrual_rules(
    session: SessionDep,
    auth: AuthDep,
    include_inactive: bool = Query(default=False),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AccrualRuleListResponse:
    """List the company's accrual rules."""
    return await accrual_rule_service.list_rules(
        session,
        auth.company_id,
        include_inactive=include_inactive,
        offset=offset,
        limit=limit,
    )


@accrual_rules_router.get("/{rule_id}", response_model=AccrualRuleResponse)
async def get_accrual_rule(
    rule_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> AccrualRuleResponse:
    """Get a single accrual rule."""
    return await accrual_rule_service.get_rule(session, auth.company_id, rule_id)


@accrual_rules_router.get("/{rule_id}/history", response_model=AuditHistoryResponse)
async def get_accrual_rule_history(
    rule_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
) -> AuditHistoryResponse:
    """List the recorded changes to an accrual rule (admin only)."""
    return await accrual_rule_service.get_rule_history(session, auth.company_id, rule_id)


@accrual_rules_router.patch("/{rule_id}", response_model=AccrualRuleResponse)
async def update_accrual_rule(
    rule_id: uuid.UUID,
    payload: UpdateAccrualRuleRequest,
    session: SessionDep,
    auth: AdminDep,
) -> AccrualRuleResponse:
    """Change an accrual rule's credit, cap, description or active flag (admin only)."""
    return await accrual_rule_service.update_rule(session, auth, rule_id, payload)


@accrual_rules_router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_accrual_rule(
    rule_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
) -> None:
    """Deactivate an accrual rule (admin only)."""
    await accrual_rule_service.deactivate_rule(session, auth, rule_id)
