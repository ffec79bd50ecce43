from __future__ import annotations

from pydantic import BaseModel


class LeaveStatisticsResponse(BaseModel):
    """Leave request counts by status."""

    total: int
    pending: int
    approved: int
    rejected: int
    cancelled: int
