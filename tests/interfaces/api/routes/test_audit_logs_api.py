"""Tests for the audit log endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


def _create_template(client, auth_headers, business_unit_id) -> dict:
    response = client.post(
        "/templates/",
        json={
            "name": "Finance Pooled Desktop",
            "business_unit_id": business_unit_id,
            "naming_prefix": "fin-avd",
            "regions": ["eastus"],
            "primary_region": "eastus",
        },
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_mutations_are_audited_with_request_metadata(client, auth_headers, business_unit):
    template = _create_template(client, auth_headers, business_unit.id)

    page = client.get(
        "/audit-logs/", params={"entity_type": "Template"}, headers=auth_headers
    ).json()

    assert page["total"] == 1
    entry = page["items"][0]
    assert entry["action"] == "TEMPLATE_CREATED"
    assert entry["entity_id"] == str(template["id"])
    assert entry["entity_name"] == "Finance Pooled Desktop"
    assert entry["admin_name"] == "Ada Admin"
    assert entry["user_agent"] == "testclient"
    assert entry["new_value"]["naming_prefix"] == "fin-avd"


def test_audit_log_paginates_newest_first(client, auth_headers):
    for code in ("AAA", "BBB", "CCC"):
        client.post(
            "/business-units/", json={"name": f"Unit {code}", "code": code}, headers=auth_headers
        )

    first = client.get(
        "/audit-logs/",
        params={"action": "BUSINESS_UNIT_CREATED", "page_size": 2},
        headers=auth_headers,
    ).json()
    second = client.get(
        "/audit-logs/",
        params={"action": "BUSINESS_UNIT_CREATED", "page_size": 2, "page": 2},
        headers=auth_headers,
    ).json()

    assert first["total"] == 3
    assert first["total_pages"] == 2
    assert [item["entity_name"] for item in first["items"]] == ["Unit CCC", "Unit BBB"]
    assert [item["entity_name"] for item in second["items"]] == ["Unit AAA"]


def test_actions_and_entity_types_are_counted(client, auth_headers, business_unit):
    _create_template(client, auth_headers, business_unit.id)

    actions = client.get("/audit-logs/actions", headers=auth_headers).json()
    entity_types = client.get("/audit-logs/entity-types", headers=auth_headers).json()

    counts = {item["value"]: item["count"] for item in actions}
    assert counts["LOGIN"] == 1
    assert counts["BUSINESS_UNIT_CREATED"] == 1
    assert counts["TEMPLATE_CREATED"] == 1
    assert {item["value"] for item in entity_types} == {"AdminUser", "BusinessUnit", "Template"}


def test_entity_trail_survives_deletion(client, auth_headers, business_unit):
    template = _create_template(client, auth_headers, business_unit.id)
    client.patch(
        f"/templates/{template['id']}/status", json={"status": "IN_REVIEW"}, headers=auth_headers
    )
    client.delete(f"/templates/{template['id']}", headers=auth_headers)

    trail = client.get(f"/audit-logs/Template/{template['id']}", headers=auth_headers).json()

    assert [entry["action"] for entry in trail] == [
        "TEMPLATE_DELETED",
        "TEMPLATE_STATUS_CHANGED",
        "TEMPLATE_CREATED",
    ]
    assert trail[1]["details"]["new_status"] == "IN_REVIEW"


def test_single_entry_lookup(client, auth_headers):
    first = client.get("/audit-logs/", headers=auth_headers).json()["items"][0]

    found = client.get(f"/audit-logs/entry/{first['id']}", headers=auth_headers)
    missing = client.get("/audit-logs/entry/99999", headers=auth_headers)

    assert found.status_code == 200
    assert found.json()["action"] == "LOGIN"
    assert missing.status_code == 404


def test_audit_log_rejects_oversized_pages(client, auth_headers):
    response = client.get("/audit-logs/", params={"page_size": 500}, headers=auth_headers)

    assert response.status_code == 422
