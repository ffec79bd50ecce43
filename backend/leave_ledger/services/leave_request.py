# ruff: noqa: TC003
"""Read-only access to leave requests recorded by the approval workflow."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from leave_ledger.models.enums import LeaveStatus, LeaveType
from leave_ledger.models.leave_request import LeaveRequest
from leave_ledger.schemas.statistics import LeaveStatisticsResponse
from leave_ledger.services.consumption import LeaveInterval

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


async def list_approved_intervals(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    *,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[LeaveInterval]:
    """Approved leave for an employee, optionally limited to intervals overlapping the bounds.

    Rows are returned unclipped; the engine clips them to its own windows.
    """
    filters = [
        col(LeaveRequest.company_id) == company_id,
        col(LeaveRequest.employee_id) == employee_id,
        col(LeaveRequest.status) == LeaveStatus.APPROVED.value,
    ]
    if start_date is not None:
        filters.append(col(LeaveRequest.end_date) >= start_date)
    if end_date is not None:
        filters.append(col(LeaveRequest.start_date) <= end_date)

    result = await session.execute(
        select(LeaveRequest).where(*filters).order_by(col(LeaveRequest.start_date), col(LeaveRequest.created_at))
    )
    return [
        LeaveInterval(
            leave_type=LeaveType(request.leave_type),
            start_date=request.start_date,
            end_date=request.end_date,
        )
        for request in result.scalars().all()
    ]


async def get_leave_statistics(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID | None = None,
) -> LeaveStatisticsResponse:
    """Count a tenant's leave requests by status, optionally for one employee."""
    filters = [col(LeaveRequest.company_id) == company_id]
    if employee_id is not None:
        filters.append(col(LeaveRequest.employee_id) == employee_id)

    result = await session.execute(
        select(col(LeaveRequest.status), func.count()).where(*filters).group_by(col(LeaveRequest.status))
    )
    counts = {status: count for status, count in result.all()}

    return LeaveStatisticsResponse(
        total=sum(counts.values()),
        pending=counts.get(LeaveStatus.PENDING.value, 0),
        approved=counts.get(LeaveStatus.APPROVED.value, 0),
        rejected=counts.get(LeaveStatus.REJECTED.value, 0),
        cancelled=counts.get(LeaveStatus.CANCELLED.value, 0),
    )
