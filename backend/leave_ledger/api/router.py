from fastapi import APIRouter

from leave_ledger.api.accrual_rules import accrual_rules_router
from leave_ledger.api.balances import employee_leave_router
from leave_ledger.api.employees import employees_router
from leave_ledger.api.statistics import statistics_router

api_router = APIRouter()
api_router.include_router(accrual_rules_router)
api_router.include_router(employees_router)
api_router.include_router(employee_leave_router)
api_router.include_router(statistics_router)
