from sqlmodel import SQLModel

from leave_ledger.models.accrual_rule import LeaveAccrualRule
from leave_ledger.models.audit import AuditLog
from leave_ledger.models.base import TimestampMixin, UpdatedAtMixin, UUIDBase
from leave_ledger.models.enums import AuditAction, AuditEntityType, LeaveStatus, LeaveType
from leave_ledger.models.leave_request import LeaveRequest

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "LeaveAccrualRule",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "SQLModel",
    "TimestampMixin",
    "UpdatedAtMixin",
    "UUIDBase",
]
