"""Cascading reconciler: settle per-type usage against entitlement.

Every non-annual type first spends its own entitlement. Overflow borrows from
the shared annual pool, and whatever the pool cannot cover becomes leave
without pay (LWP). Annual's own overuse is clamped and is *not* moved to LWP;
the clamped amount is reported on the result and logged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from leave_ledger.models.enums import LeaveType
from leave_ledger.services.accrual import quantize_days

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


@dataclass
class TypeBalance:
    """Entitlement, consumption and what is left for one bucket."""

    leave_type: LeaveType
    total: Decimal
    used: Decimal
    remaining: Decimal

    def rounded(self) -> TypeBalance:
        return TypeBalance(
            leave_type=self.leave_type,
            total=quantize_days(self.total),
            used=quantize_days(self.used),
            remaining=quantize_days(self.remaining),
        )


@dataclass(frozen=True)
class CascadeStep:
    """How one non-annual type's usage was settled."""

    leave_type: LeaveType
    own_covered: Decimal
    overflow: Decimal
    borrowed: Decimal
    uncovered: Decimal


@dataclass
class ReconciliationResult:
    """Balance map plus the trace of how it was reached."""

    balances: dict[LeaveType, TypeBalance]
    steps: list[CascadeStep] = field(default_factory=list)
    annual_borrowed: Decimal = ZERO
    annual_overuse: Decimal = ZERO
    direct_unpaid: Decimal = ZERO
    lwp: Decimal = ZERO

    def remaining(self, leave_type: LeaveType) -> Decimal:
        balance = self.balances.get(leave_type)
        return balance.remaining if balance is not None else ZERO

    def has_bucket(self, leave_type: LeaveType) -> bool:
        return leave_type in self.balances and leave_type is not LeaveType.LWP

    def rounded_balances(self) -> dict[LeaveType, TypeBalance]:
        return {leave_type: balance.rounded() for leave_type, balance in self.balances.items()}


def reconcile(
    totals: Mapping[LeaveType, Decimal],
    used: Mapping[LeaveType, int | Decimal],
) -> ReconciliationResult:
    """Apply the borrowing cascade and return the balance map.

    ``totals`` holds entitlement for configured types only; ``used`` holds
    consumed days for any type. Configured non-annual types are processed in
    ``LeaveType`` declaration order. Usage of unconfigured types and of the
    explicit LWP type goes straight to LWP without touching the annual pool.
    Values are left unrounded; use ``rounded_balances`` for display.
    """
    annual_total = Decimal(totals.get(LeaveType.ANNUAL, ZERO))
    annual_used_direct = Decimal(used.get(LeaveType.ANNUAL, 0))
    annual_headroom = annual_total - annual_used_direct
    annual_remaining = max(ZERO, annual_headroom)

    result = ReconciliationResult(balances={})
    if annual_headroom < 0:
        result.annual_overuse = -annual_headroom
        logger.info("Annual overuse of %s days clamped; not counted as LWP", result.annual_overuse)

    lwp = ZERO
    for leave_type in LeaveType:
        if leave_type is LeaveType.ANNUAL:
            continue
        type_used = Decimal(used.get(leave_type, 0))

        if leave_type not in totals or leave_type is LeaveType.LWP:
            if type_used > 0:
                result.direct_unpaid += type_used
                lwp += type_used
            continue

        type_total = Decimal(totals[leave_type])
        overflow = max(ZERO, type_used - type_total)
        borrowed = min(overflow, annual_remaining)
        annual_remaining -= borrowed
        uncovered = overflow - borrowed
        lwp += uncovered

        result.steps.append(
            CascadeStep(
                leave_type=leave_type,
                own_covered=min(type_used, type_total),
                overflow=overflow,
                borrowed=borrowed,
                uncovered=uncovered,
            )
        )
        result.balances[leave_type] = TypeBalance(
            leave_type=leave_type,
            total=type_total,
            used=type_used,
            remaining=max(ZERO, type_total - type_used),
        )

    annual_borrowed = max(ZERO, annual_headroom - annual_remaining)
    annual_used_combined = annual_used_direct + annual_borrowed
    result.annual_borrowed = annual_borrowed
    result.balances[LeaveType.ANNUAL] = TypeBalance(
        leave_type=LeaveType.ANNUAL,
        total=annual_total,
        used=annual_used_combined,
        remaining=max(ZERO, annual_total - annual_used_combined),
    )

    result.lwp = lwp
    if lwp > 0:
        result.balances[LeaveType.LWP] = TypeBalance(leave_type=LeaveType.LWP, total=ZERO, used=lwp, remaining=ZERO)
        logger.info("Reconciliation recorded %s LWP days", lwp)

    return result
