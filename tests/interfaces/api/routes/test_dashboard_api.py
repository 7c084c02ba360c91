"""Tests for the dashboard and health endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


def _create_template(client, auth_headers, business_unit_id, name, region) -> dict:
    response = client.post(
        "/templates/",
        json={
            "name": name,
            "business_unit_id": business_unit_id,
            "naming_prefix": "fin-avd",
            "regions": [region],
            "primary_region": region,
        },
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture()
def populated(client, auth_headers, business_unit, make_application):
    make_application("office-365")
    first = _create_template(client, auth_headers, business_unit.id, "Alpha", "eastus")
    _create_template(client, auth_headers, business_unit.id, "Beta", "eastus")
    _create_template(client, auth_headers, business_unit.id, "Gamma", "westeurope")
    client.patch(
        f"/templates/{first['id']}/status", json={"status": "IN_REVIEW"}, headers=auth_headers
    )
    return first


def test_health_needs_no_token(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_stats(client, auth_headers, populated):
    stats = client.get("/dashboard/stats", headers=auth_headers).json()

    assert stats == {
        "total": 3,
        "draft": 2,
        "in_review": 1,
        "approved": 0,
        "deployed": 0,
        "deprecated": 0,
        "total_applications": 1,
        "total_business_units": 1,
    }


def test_counts_by_status_region_and_business_unit(
    client, auth_headers, business_unit, populated
):
    by_status = client.get("/dashboard/by-status", headers=auth_headers).json()
    assert {item["status"]: item["count"] for item in by_status} == {
        "DRAFT": 2,
        "IN_REVIEW": 1,
        "APPROVED": 0,
        "DEPLOYED": 0,
        "DEPRECATED": 0,
    }

    by_region = client.get("/dashboard/by-region", headers=auth_headers).json()
    assert {item["region"]: item["count"] for item in by_region} == {
        "eastus": 2,
        "westeurope": 1,
    }

    by_unit = client.get("/dashboard/by-business-unit", headers=auth_headers).json()
    assert by_unit == [
        {
            "business_unit": {"id": business_unit.id, "name": "Finance", "code": "FIN"},
            "count": 3,
        }
    ]


def test_recent_activity(client, auth_headers, populated):
    recent = client.get("/dashboard/recent", params={"limit": 2}, headers=auth_headers).json()

    assert len(recent["recent_templates"]) == 2
    assert recent["recent_templates"][0]["name"] == "Alpha"
    assert recent["recent_history"][0]["action"] == "STATUS_CHANGED"
    assert recent["recent_history"][0]["template_name"] == "Alpha"

    audit = client.get(
        "/dashboard/recent-activity", params={"limit": 1}, headers=auth_headers
    ).json()
    assert [entry["action"] for entry in audit] == ["TEMPLATE_STATUS_CHANGED"]
