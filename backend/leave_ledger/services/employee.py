# ruff: noqa: TC003
"""Employee directory collaborator.

The balance engine needs only an employee's tenant and joining date. In
production this is backed by the HR system; development and tests use the
in-memory directory.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Protocol, runtime_checkable

from pydantic import BaseModel


class EmployeeInfo(BaseModel):
    """What the directory knows about one employee."""

    id: uuid.UUID
    company_id: uuid.UUID
    first_name: str
    last_name: str
    email: str
    joining_date: date | None = None  # accrual starts from the first of this month

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@runtime_checkable
class EmployeeDirectory(Protocol):
    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Look up one employee within a tenant; None when unknown."""
        ...

    async def list_employees(self, company_id: uuid.UUID) -> list[EmployeeInfo]: ...


class InMemoryEmployeeDirectory:
    """Dict-backed directory, keyed by (company_id, employee_id)."""

    def __init__(self, employees: list[EmployeeInfo] | None = None) -> None:
        self._employees: dict[tuple[uuid.UUID, uuid.UUID], EmployeeInfo] = {}
        for employee in employees or []:
            self.upsert(employee)

    def upsert(self, employee: EmployeeInfo) -> None:
        self._employees[(employee.company_id, employee.id)] = employee

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        return self._employees.get((company_id, employee_id))

    async def list_employees(self, company_id: uuid.UUID) -> list[EmployeeInfo]:
        return sorted(
            (e for e in self._employees.values() if e.company_id == company_id),
            key=lambda e: (e.last_name, e.first_name),
        )


_directory: EmployeeDirectory = InMemoryEmployeeDirectory()


def get_employee_directory() -> EmployeeDirectory:
    return _directory


def set_employee_directory(directory: EmployeeDirectory) -> None:
    """Swap the directory implementation (production wiring or tests)."""
    global _directory
    _directory = directory
