"""Tests for business unit, contact, application and base image endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")


def _create_template(client, auth_headers, business_unit_id, **overrides) -> dict:
    payload = {
        "name": "Finance Pooled Desktop",
        "business_unit_id": business_unit_id,
        "naming_prefix": "fin-avd",
        "regions": ["eastus"],
        "primary_region": "eastus",
    }
    payload.update(overrides)
    response = client.post("/templates/", json=payload, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_business_unit_crud(client, auth_headers):
    created = client.post(
        "/business-units/",
        json={"name": "Human Resources", "code": "HR", "cost_center": "CC-200"},
        headers=auth_headers,
    )
    assert created.status_code == 201, created.text
    unit_id = created.json()["id"]

    updated = client.put(
        f"/business-units/{unit_id}",
        json={"description": "People team"},
        headers=auth_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["description"] == "People team"
    assert updated.json()["code"] == "HR"

    listing = client.get("/business-units/", headers=auth_headers).json()
    assert [unit["code"] for unit in listing] == ["HR"]

    assert client.delete(f"/business-units/{unit_id}", headers=auth_headers).status_code == 204
    assert client.get(f"/business-units/{unit_id}", headers=auth_headers).status_code == 404


def test_business_unit_code_and_name_are_unique(client, auth_headers, business_unit):
    same_code = client.post(
        "/business-units/", json={"name": "Other", "code": "FIN"}, headers=auth_headers
    )
    same_name = client.post(
        "/business-units/", json={"name": "Finance", "code": "FIN2"}, headers=auth_headers
    )
    bad_code = client.post(
        "/business-units/", json={"name": "Lower", "code": "fin"}, headers=auth_headers
    )

    assert same_code.status_code == 409
    assert same_name.status_code == 409
    assert bad_code.status_code == 422


def test_inactive_business_units_are_hidden_by_default(client, auth_headers, business_unit):
    client.put(
        f"/business-units/{business_unit.id}", json={"is_active": False}, headers=auth_headers
    )

    assert client.get("/business-units/", headers=auth_headers).json() == []
    everything = client.get(
        "/business-units/", params={"include_inactive": True}, headers=auth_headers
    ).json()
    assert [unit["id"] for unit in everything] == [business_unit.id]


def test_business_unit_in_use_cannot_be_deleted(client, auth_headers, business_unit):
    _create_template(client, auth_headers, business_unit.id)

    response = client.delete(f"/business-units/{business_unit.id}", headers=auth_headers)

    assert response.status_code == 409
    assert client.get(f"/business-units/{business_unit.id}", headers=auth_headers).json()[
        "template_count"
    ] == 1


def test_contacts_primary_flag_and_email_uniqueness(client, auth_headers, business_unit):
    first = client.post(
        "/contacts/",
        json={
            "name": "Grace",
            "email": "grace@example.com",
            "business_unit_id": business_unit.id,
            "is_primary": True,
        },
        headers=auth_headers,
    )
    assert first.status_code == 201, first.text
    second = client.post(
        "/contacts/",
        json={
            "name": "Linus",
            "email": "linus@example.com",
            "business_unit_id": business_unit.id,
            "is_primary": True,
        },
        headers=auth_headers,
    )
    assert second.status_code == 201

    contacts = client.get(
        f"/business-units/{business_unit.id}/contacts", headers=auth_headers
    ).json()
    primaries = [contact["name"] for contact in contacts if contact["is_primary"]]
    assert primaries == ["Linus"]

    duplicate = client.post(
        "/contacts/",
        json={
            "name": "Grace again",
            "email": "grace@example.com",
            "business_unit_id": business_unit.id,
        },
        headers=auth_headers,
    )
    assert duplicate.status_code == 409


def test_contact_needs_existing_business_unit(client, auth_headers):
    response = client.post(
        "/contacts/",
        json={"name": "Nobody", "email": "nobody@example.com", "business_unit_id": 999},
        headers=auth_headers,
    )

    assert response.status_code == 404


def test_assigned_contact_cannot_be_deleted(client, auth_headers, business_unit):
    contact = client.post(
        "/contacts/",
        json={"name": "Grace", "email": "grace@example.com", "business_unit_id": business_unit.id},
        headers=auth_headers,
    ).json()
    _create_template(client, auth_headers, business_unit.id, contact_id=contact["id"])

    response = client.delete(f"/contacts/{contact['id']}", headers=auth_headers)

    assert response.status_code == 409


def test_application_catalogue(client, auth_headers):
    created = client.post(
        "/applications/",
        json={
            "name": "office-365",
            "display_name": "Microsoft 365 Apps",
            "category": "Productivity",
            "is_msix_app_attach": True,
        },
        headers=auth_headers,
    )
    assert created.status_code == 201, created.text
    client.post(
        "/applications/",
        json={"name": "notepad-plus", "display_name": "Notepad++", "category": "Tools"},
        headers=auth_headers,
    )

    msix = client.get(
        "/applications/", params={"is_msix_app_attach": True}, headers=auth_headers
    ).json()
    assert [item["name"] for item in msix["items"]] == ["office-365"]

    categories = client.get("/applications/meta/categories", headers=auth_headers).json()
    assert {item["value"] for item in categories} == {"Productivity", "Tools"}

    duplicate = client.post(
        "/applications/",
        json={"name": "office-365", "display_name": "Again"},
        headers=auth_headers,
    )
    assert duplicate.status_code == 409


def test_attached_application_cannot_be_deleted(
    client, auth_headers, business_unit, make_application
):
    template = _create_template(client, auth_headers, business_unit.id)
    office = make_application("office-365")
    client.post(
        f"/templates/{template['id']}/applications",
        json={"application_id": office.id},
        headers=auth_headers,
    )

    response = client.delete(f"/applications/{office.id}", headers=auth_headers)
    used_by = client.get(f"/applications/{office.id}/templates", headers=auth_headers).json()

    assert response.status_code == 409
    assert [item["id"] for item in used_by] == [template["id"]]


def test_base_images(client, auth_headers, base_image):
    listing = client.get("/base-images/", headers=auth_headers).json()
    assert [image["name"] for image in listing] == ["win11-23h2-avd"]

    duplicate = client.post(
        "/base-images/",
        json={
            "name": "win11-23h2-avd",
            "display_name": "Duplicate",
            "os_type": "Windows 11",
            "version": "23H2",
        },
        headers=auth_headers,
    )
    assert duplicate.status_code == 409
    assert client.get("/base-images/999", headers=auth_headers).status_code == 404
