# ruff: noqa: B008, TC003
"""Request-scoped dependencies: dev auth headers, tenant scoping and the as-of date."""

from __future__ import annotations

import uuid
from datetime import date
from typing import Annotated

from fastapi import Depends, Header, Path, Query

from leave_ledger.exceptions import ForbiddenError
from leave_ledger.schemas.auth import AuthContext, Role


async def get_auth_context(
    x_company_id: uuid.UUID = Header(),
    x_user_id: uuid.UUID = Header(),
    x_role: Role = Header(default=Role.EMPLOYEE),
) -> AuthContext:
    """Build the caller's identity from the dev auth headers."""
    return AuthContext(company_id=x_company_id, user_id=x_user_id, role=x_role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_admin(auth: AuthDep) -> AuthContext:
    """Accrual configuration and the employee directory are admin-only."""
    if not auth.is_admin:
        raise ForbiddenError("Admin access required")
    return auth


AdminDep = Annotated[AuthContext, Depends(require_admin)]


async def validate_company_scope(
    auth: AuthDep,
    company_id: uuid.UUID = Path(),
) -> AuthContext:
    """Reject requests whose path tenant differs from the caller's tenant."""
    if company_id != auth.company_id:
        raise ForbiddenError("Company ID mismatch")
    return auth


def get_as_of(
    as_of: date | None = Query(default=None, description="Reference date; defaults to today"),
) -> date:
    """The date balances and ledger windows are computed at."""
    return as_of if as_of is not None else date.today()


AsOfDep = Annotated[date, Depends(get_as_of)]
