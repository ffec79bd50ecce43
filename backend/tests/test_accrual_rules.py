"""Integration tests for accrual-rule administration (create, list, update, deactivate, audit)."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from leave_ledger.models.audit import AuditLog
from leave_ledger.models.enums import AuditAction, AuditEntityType

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

COMPANY_ID = uuid.uuid4()
USER_ID = uuid.uuid4()
AUTH_HEADERS = {
    "X-Company-Id": str(COMPANY_ID),
    "X-User-Id": str(USER_ID),
    "X-Role": "admin",
}
EMPLOYEE_HEADERS = {
    "X-Company-Id": str(COMPANY_ID),
    "X-User-Id": str(USER_ID),
    "X-Role": "employee",
}
RULES_URL = f"/companies/{COMPANY_ID}/accrual-rules"


async def _create_rule(client: AsyncClient, leave_type: str = "annual", **overrides: object) -> dict:
    payload: dict[str, object] = {"leave_type": leave_type, "monthly_credit": 1.67}
    payload.update(overrides)
    resp = await client.post(RULES_URL, json=payload, headers=AUTH_HEADERS)
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_create_rule(async_client: AsyncClient) -> None:
    data = await _create_rule(async_client, "sick", monthly_credit=0.5, max_annual_limit=6, description="Sick leave")

    assert data["leave_type"] == "sick"
    assert data["monthly_credit"] == 0.5
    assert data["max_annual_limit"] == 6.0
    assert data["is_active"] is True
    assert data["company_id"] == str(COMPANY_ID)
    assert data["created_by"] == str(USER_ID)


async def test_create_requires_admin(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        RULES_URL, json={"leave_type": "annual", "monthly_credit": 1.67}, headers=EMPLOYEE_HEADERS
    )
    assert resp.status_code == 403


async def test_company_mismatch_forbidden(async_client: AsyncClient) -> None:
    other_url = f"/companies/{uuid.uuid4()}/accrual-rules"
    resp = await async_client.get(other_url, headers=AUTH_HEADERS)
    assert resp.status_code == 403


async def test_duplicate_active_rule_conflicts(async_client: AsyncClient) -> None:
    await _create_rule(async_client, "annual")
    resp = await async_client.post(RULES_URL, json={"leave_type": "annual", "monthly_credit": 2}, headers=AUTH_HEADERS)
    assert resp.status_code == 409


async def test_lwp_rule_rejected(async_client: AsyncClient) -> None:
    resp = await async_client.post(RULES_URL, json={"leave_type": "lwp", "monthly_credit": 1}, headers=AUTH_HEADERS)
    assert resp.status_code == 422


async def test_negative_credit_rejected(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        RULES_URL, json={"leave_type": "annual", "monthly_credit": -1}, headers=AUTH_HEADERS
    )
    assert resp.status_code == 422


async def test_unknown_leave_type_rejected(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        RULES_URL, json={"leave_type": "sabbatical", "monthly_credit": 1}, headers=AUTH_HEADERS
    )
    assert resp.status_code == 422


async def test_get_rule_and_missing_rule(async_client: AsyncClient) -> None:
    created = await _create_rule(async_client)

    resp = await async_client.get(f"{RULES_URL}/{created['id']}", headers=EMPLOYEE_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]

    resp = await async_client.get(f"{RULES_URL}/{uuid.uuid4()}", headers=EMPLOYEE_HEADERS)
    assert resp.status_code == 404


async def test_list_hides_inactive_by_default(async_client: AsyncClient) -> None:
    await _create_rule(async_client, "annual")
    sick = await _create_rule(async_client, "sick", monthly_credit=0.5)
    resp = await async_client.delete(f"{RULES_URL}/{sick['id']}", headers=AUTH_HEADERS)
    assert resp.status_code == 204

    resp = await async_client.get(RULES_URL, headers=EMPLOYEE_HEADERS)
    data = resp.json()
    assert data["total"] == 1
    assert [item["leave_type"] for item in data["items"]] == ["annual"]

    resp = await async_client.get(RULES_URL, params={"include_inactive": True}, headers=EMPLOYEE_HEADERS)
    assert resp.json()["total"] == 2


async def test_update_rule(async_client: AsyncClient) -> None:
    created = await _create_rule(async_client, "casual", monthly_credit=1, max_annual_limit=10)

    resp = await async_client.patch(
        f"{RULES_URL}/{created['id']}",
        json={"monthly_credit": 1.25, "max_annual_limit": None},
        headers=AUTH_HEADERS,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["monthly_credit"] == 1.25
    assert data["max_annual_limit"] is None


async def test_empty_update_rejected(async_client: AsyncClient) -> None:
    created = await _create_rule(async_client)
    resp = await async_client.patch(f"{RULES_URL}/{created['id']}", json={}, headers=AUTH_HEADERS)
    assert resp.status_code == 422


async def test_null_monthly_credit_rejected(async_client: AsyncClient) -> None:
    created = await _create_rule(async_client)
    resp = await async_client.patch(
        f"{RULES_URL}/{created['id']}", json={"monthly_credit": None}, headers=AUTH_HEADERS
    )
    assert resp.status_code == 400


async def test_reactivation_conflicts_with_newer_rule(async_client: AsyncClient) -> None:
    old = await _create_rule(async_client, "annual")
    await async_client.delete(f"{RULES_URL}/{old['id']}", headers=AUTH_HEADERS)
    await _create_rule(async_client, "annual", monthly_credit=2)

    resp = await async_client.patch(f"{RULES_URL}/{old['id']}", json={"is_active": True}, headers=AUTH_HEADERS)
    assert resp.status_code == 409


async def test_deactivate_twice_is_noop(async_client: AsyncClient) -> None:
    created = await _create_rule(async_client)
    first = await async_client.delete(f"{RULES_URL}/{created['id']}", headers=AUTH_HEADERS)
    second = await async_client.delete(f"{RULES_URL}/{created['id']}", headers=AUTH_HEADERS)
    assert first.status_code == 204
    assert second.status_code == 204


async def test_mutations_write_audit_log(async_client: AsyncClient, db_session: AsyncSession) -> None:
    created = await _create_rule(async_client)
    rule_id = uuid.UUID(created["id"])
    await async_client.patch(f"{RULES_URL}/{rule_id}", json={"description": "Updated"}, headers=AUTH_HEADERS)
    await async_client.delete(f"{RULES_URL}/{rule_id}", headers=AUTH_HEADERS)
    await async_client.delete(f"{RULES_URL}/{rule_id}", headers=AUTH_HEADERS)

    result = await db_session.execute(
        select(AuditLog).where(col(AuditLog.entity_id) == rule_id).order_by(col(AuditLog.created_at))
    )
    entries = list(result.scalars().all())

    assert [e.action for e in entries] == [AuditAction.CREATE, AuditAction.UPDATE, AuditAction.DEACTIVATE]
    assert all(e.entity_type == AuditEntityType.ACCRUAL_RULE for e in entries)
    assert all(e.actor_id == USER_ID for e in entries)
    assert entries[0].before_json is None
    assert entries[0].after_json is not None
    assert entries[0].after_json["leave_type"] == "annual"
    assert entries[1].after_json is not None
    assert entries[1].after_json["description"] == "Updated"
    assert entries[2].after_json is not None
    assert entries[2].after_json["is_active"] is False


async def test_rule_history(async_client: AsyncClient) -> None:
    created = await _create_rule(async_client, "sick", monthly_credit=0.5)
    rule_url = f"{RULES_URL}/{created['id']}"
    await async_client.patch(rule_url, json={"monthly_credit": 0.75}, headers=AUTH_HEADERS)

    resp = await async_client.get(f"{rule_url}/history", headers=AUTH_HEADERS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert [item["action"] for item in data["items"]] == ["CREATE", "UPDATE"]
    assert data["items"][1]["before"]["monthly_credit"] == "0.50"
    assert data["items"][1]["after"]["monthly_credit"] == "0.75"


async def test_rule_history_admin_only(async_client: AsyncClient) -> None:
    created = await _create_rule(async_client)
    resp = await async_client.get(f"{RULES_URL}/{created['id']}/history", headers=EMPLOYEE_HEADERS)
    assert resp.status_code == 403


async def test_rule_history_unknown_rule(async_client: AsyncClient) -> None:
    resp = await async_client.get(f"{RULES_URL}/{uuid.uuid4()}/history", headers=AUTH_HEADERS)
    assert resp.status_code == 404
