# ruff: noqa: TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from leave_ledger.api.deps import AdminDep, AuthDep, validate_company_scope
from leave_ledger.exceptions import InvalidInputError, NotFoundError
from leave_ledger.schemas.employee import EmployeeListResponse, EmployeeResponse, UpsertEmployeeRequest
from leave_ledger.services.employee import EmployeeInfo, InMemoryEmployeeDirectory, get_employee_directory

employees_router = APIRouter(
    prefix="/companies/{company_id}/employees",
    tags=["employees"],
    dependencies=[Depends(validate_company_scope)],
)


def _to_response(employee: EmployeeInfo) -> EmployeeResponse:
    return EmployeeResponse(**employee.model_dump(), full_name=employee.full_name)


@employees_router.put("/{employee_id}", response_model=EmployeeResponse)
async def upsert_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    payload: UpsertEmployeeRequest,
    auth: AdminDep,
) -> EmployeeResponse:
    """Create or replace an employee in the development directory (admin only)."""
    directory = get_employee_directory()
    if not isinstance(directory, InMemoryEmployeeDirectory):
        raise InvalidInputError("The configured employee directory is read-only")
    employee = EmployeeInfo(id=employee_id, company_id=company_id, **payload.model_dump())
    directory.upsert(employee)
    return _to_response(employee)


@employees_router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    auth: AuthDep,
) -> EmployeeResponse:
    employee = await get_employee_directory().get_employee(company_id, employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")
    return _to_response(employee)


@employees_router.get("", response_model=EmployeeListResponse)
async def list_employees(
    company_id: uuid.UUID,
    auth: AuthDep,
) -> EmployeeListResponse:
    """List a tenant's employees, ordered by name."""
    employees = await get_employee_directory().list_employees(company_id)
    items = [_to_response(e) for e in employees]
    return EmployeeListResponse(items=items, total=len(items))
