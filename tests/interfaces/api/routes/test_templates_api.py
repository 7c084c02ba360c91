"""Tests for the template endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


def _template_payload(business_unit_id: int, **overrides) -> dict:
    payload = {
        "name": "Finance Pooled Desktop",
        "business_unit_id": business_unit_id,
        "naming_prefix": "fin-avd",
        "regions": ["eastus", "westus"],
        "primary_region": "eastus",
        "tags": {"cost-center": "1001"},
    }
    payload.update(overrides)
    return payload


def _create(client, auth_headers, business_unit_id, **overrides) -> dict:
    response = client.post(
        "/templates/", json=_template_payload(business_unit_id, **overrides), headers=auth_headers
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_create_and_read_template(client, auth_headers, business_unit):
    created = _create(client, auth_headers, business_unit.id)

    assert created["status"] == "DRAFT"
    assert created["environment"] == "PILOT"
    assert created["request_date"] is not None
    assert created["applications"] == []

    fetched = client.get(f"/templates/{created['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["tags"] == {"cost-center": "1001"}


def test_create_rejects_primary_region_outside_regions(client, auth_headers, business_unit):
    response = client.post(
        "/templates/",
        json=_template_payload(business_unit.id, primary_region="northeurope"),
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert "northeurope" in response.json()["detail"]


def test_create_rejects_unknown_business_unit(client, auth_headers, business_unit):
    response = client.post(
        "/templates/", json=_template_payload(999), headers=auth_headers
    )

    assert response.status_code == 404


def test_list_filters_and_paginates(client, auth_headers, business_unit):
    first = _create(client, auth_headers, business_unit.id, name="Alpha Desktop")
    _create(client, auth_headers, business_unit.id, name="Beta Desktop")
    _create(
        client,
        auth_headers,
        business_unit.id,
        name="Gamma Desktop",
        regions=["northeurope"],
        primary_region="northeurope",
    )
    client.patch(
        f"/templates/{first['id']}/status", json={"status": "IN_REVIEW"}, headers=auth_headers
    )

    page = client.get(
        "/templates/",
        params={"sort_by": "name", "sort_order": "asc", "page_size": 2},
        headers=auth_headers,
    ).json()
    assert page["total"] == 3
    assert page["total_pages"] == 2
    assert [item["name"] for item in page["items"]] == ["Alpha Desktop", "Beta Desktop"]

    in_review = client.get(
        "/templates/", params={"status": "IN_REVIEW"}, headers=auth_headers
    ).json()
    assert [item["id"] for item in in_review["items"]] == [first["id"]]

    by_region = client.get(
        "/templates/", params={"region": "northeurope"}, headers=auth_headers
    ).json()
    assert [item["name"] for item in by_region["items"]] == ["Gamma Desktop"]

    searched = client.get("/templates/", params={"search": "beta"}, headers=auth_headers).json()
    assert [item["name"] for item in searched["items"]] == ["Beta Desktop"]


def test_list_rejects_unknown_sort_column(client, auth_headers):
    response = client.get("/templates/", params={"sort_by": "password"}, headers=auth_headers)

    assert response.status_code == 400


def test_update_template_is_partial(client, auth_headers, business_unit):
    created = _create(client, auth_headers, business_unit.id)

    response = client.put(
        f"/templates/{created['id']}",
        json={"notes": "Pilot for the finance floor", "max_session_limit": 12},
        headers=auth_headers,
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["notes"] == "Pilot for the finance floor"
    assert body["max_session_limit"] == 12
    assert body["name"] == created["name"]
    assert body["updated_by_id"] is not None


def test_update_cannot_change_status(client, auth_headers, business_unit):
    created = _create(client, auth_headers, business_unit.id)

    response = client.put(
        f"/templates/{created['id']}", json={"status": "DEPLOYED"}, headers=auth_headers
    )

    assert response.status_code == 422


def test_status_workflow_over_http(client, auth_headers, business_unit):
    created = _create(client, auth_headers, business_unit.id)
    url = f"/templates/{created['id']}/status"

    skipped = client.patch(url, json={"status": "DEPLOYED"}, headers=auth_headers)
    assert skipped.status_code == 400
    assert "DRAFT" in skipped.json()["detail"]

    for status_value in ("IN_REVIEW", "APPROVED"):
        response = client.patch(
            url, json={"status": status_value, "comment": "ok"}, headers=auth_headers
        )
        assert response.status_code == 200, response.text
    assert response.json()["approved_date"] is not None

    history = client.get(f"/templates/{created['id']}/history", headers=auth_headers).json()
    assert [entry["action"] for entry in history] == [
        "STATUS_CHANGED",
        "STATUS_CHANGED",
        "CREATED",
    ]
    assert history[0]["old_status"] == "IN_REVIEW"
    assert history[0]["new_status"] == "APPROVED"
    assert history[0]["user_name"] == "Ada Admin"


def test_history_of_missing_template_is_404(client, auth_headers):
    assert client.get("/templates/404/history", headers=auth_headers).status_code == 404


def test_delete_template(client, auth_headers, business_unit):
    created = _create(client, auth_headers, business_unit.id)

    response = client.delete(f"/templates/{created['id']}", headers=auth_headers)

    assert response.status_code == 204
    assert client.get(f"/templates/{created['id']}", headers=auth_headers).status_code == 404


def test_attach_application_twice_conflicts(
    client, auth_headers, business_unit, make_application
):
    created = _create(client, auth_headers, business_unit.id)
    office = make_application("office-365")
    url = f"/templates/{created['id']}/applications"

    first = client.post(url, json={"application_id": office.id}, headers=auth_headers)
    second = client.post(url, json={"application_id": office.id}, headers=auth_headers)

    assert first.status_code == 201
    assert first.json()["application"]["name"] == "office-365"
    assert second.status_code == 409
    assert second.json()["detail"] == "Application already exists in template"
    assert len(client.get(url, headers=auth_headers).json()) == 1


def test_reorder_and_detach_applications(
    client, auth_headers, business_unit, make_application
):
    created = _create(client, auth_headers, business_unit.id)
    office = make_application("office-365")
    teams = make_application("teams")
    url = f"/templates/{created['id']}/applications"
    for app in (office, teams):
        client.post(url, json={"application_id": app.id}, headers=auth_headers)

    reordered = client.patch(
        f"{url}/reorder",
        json={
            "applications": [
                {"application_id": office.id, "install_order": 1},
                {"application_id": teams.id, "install_order": 0},
            ]
        },
        headers=auth_headers,
    )
    assert reordered.status_code == 200, reordered.text
    assert [entry["application_id"] for entry in reordered.json()] == [teams.id, office.id]

    clash = client.patch(
        f"{url}/reorder",
        json={"applications": [{"application_id": office.id, "install_order": 0}]},
        headers=auth_headers,
    )
    assert clash.status_code == 409

    removed = client.delete(f"{url}/{teams.id}", headers=auth_headers)
    assert removed.status_code == 204
    history = client.get(f"/templates/{created['id']}/history", headers=auth_headers).json()
    assert history[0]["action"] == "APP_REMOVED"
    assert history[0]["changes"]["application_name"] == "Teams"


def test_approve_attached_application(
    client, auth_headers, business_unit, make_application
):
    created = _create(client, auth_headers, business_unit.id)
    office = make_application("office-365")
    url = f"/templates/{created['id']}/applications"
    client.post(url, json={"application_id": office.id}, headers=auth_headers)

    response = client.put(
        f"{url}/{office.id}", json={"approval_status": "APPROVED"}, headers=auth_headers
    )

    assert response.status_code == 200, response.text
    assert response.json()["approved_at"] is not None
    assert response.json()["approved_by_id"] is not None


def test_duplicate_template(client, auth_headers, business_unit, make_application):
    created = _create(client, auth_headers, business_unit.id)
    office = make_application("office-365")
    client.post(
        f"/templates/{created['id']}/applications",
        json={"application_id": office.id},
        headers=auth_headers,
    )

    response = client.post(f"/templates/{created['id']}/duplicate", headers=auth_headers)

    assert response.status_code == 201, response.text
    body = response.json()
    assert body["name"] == "Finance Pooled Desktop (Copy)"
    assert body["status"] == "DRAFT"
    assert [entry["application_id"] for entry in body["applications"]] == [office.id]
