"""Tests for JSON payload normalisation."""

from datetime import datetime, timezone
from decimal import Decimal

from avdmanager.domain.entities import Actor, TemplateStatus
from avdmanager.domain.payload import normalize_payload, snapshot


def test_normalize_payload_converts_values_to_json_safe_types():
    payload = normalize_payload(
        {
            "status": TemplateStatus.APPROVED,
            "when": datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc),
            "cost": Decimal("12.50"),
            "regions": ("eastus", "westus"),
            "labels": {"b", "a"},
            "nested": {"inner": TemplateStatus.DRAFT, 3: None},
            "flag": True,
            "count": 3,
        }
    )

    assert payload == {
        "status": "APPROVED",
        "when": "2024-05-01T12:30:00+00:00",
        "cost": 12.5,
        "regions": ["eastus", "westus"],
        "labels": ["a", "b"],
        "nested": {"inner": "DRAFT", "3": None},
        "flag": True,
        "count": 3,
    }


def test_normalize_payload_keeps_insertion_order_and_none():
    assert normalize_payload(None) is None
    assert list(normalize_payload({"z": 1, "a": 2})) == ["z", "a"]


def test_normalize_payload_stringifies_unknown_objects():
    class Opaque:
        def __str__(self) -> str:
            return "opaque"

    assert normalize_payload({"value": Opaque()}) == {"value": "opaque"}


def test_snapshot_excludes_fields():
    assert snapshot(Actor(id=4, name="Ada"), exclude=("name",)) == {"id": 4}
