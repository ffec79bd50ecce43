# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from leave_ledger.api.deps import AuthDep, validate_company_scope
from leave_ledger.db import SessionDep
from leave_ledger.schemas.statistics import LeaveStatisticsResponse
from leave_ledger.services import leave_request as leave_request_service

statistics_router = APIRouter(
    prefix="/companies/{company_id}/leave-statistics",
    tags=["statistics"],
    dependencies=[Depends(validate_company_scope)],
)


@statistics_router.get("", response_model=LeaveStatisticsResponse)
async def get_leave_statistics(
    session: SessionDep,
    auth: AuthDep,
    employee_id: uuid.UUID | None = Query(default=None),
) -> LeaveStatisticsResponse:
    """Count leave requests by status for the company or one employee."""
    return await leave_request_service.get_leave_statistics(session, auth.company_id, employee_id)
