from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Closed set of leave types.

    ``LWP`` (leave without pay) doubles as the explicitly unpaid requestable
    type and the synthetic bucket that collects unrecoverable consumption.
    Declaration order is the order in which overflow borrows from ``ANNUAL``.
    """

    ANNUAL = "annual"
    SICK = "sick"
    CASUAL = "casual"
    PERSONAL = "personal"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    EMERGENCY = "emergency"
    OTHER = "other"
    LWP = "lwp"

    @property
    def is_unpaid(self) -> bool:
        return self is LeaveType.LWP

    @property
    def is_accruable(self) -> bool:
        return self is not LeaveType.LWP


class LeaveStatus(enum.StrEnum):
    """Lifecycle state of a leave request, owned by the request workflow."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    ACCRUAL_RULE = "ACCRUAL_RULE"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DEACTIVATE = "DEACTIVATE"
