# ruff: noqa: TC003
from __future__ import annotations

import enum
import uuid

from pydantic import BaseModel


class Role(enum.StrEnum):
    """Caller role carried in the ``X-Role`` header."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AuthContext(BaseModel):
    """Identity of the caller: tenant, user and role."""

    company_id: uuid.UUID
    user_id: uuid.UUID
    role: Role = Role.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
