"""Normalisation of the free-form JSON payloads stored by the ledgers.

Ledger ``changes``, audit ``details``/``old_value``/``new_value`` and
template ``tags`` are persisted as JSON. Values are restricted to strings,
numbers, booleans, ``None``, nested mappings and lists of those so that a
payload serialises the same way every time it is written.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union

JsonScalar = Union[str, int, float, bool, None]
JsonValue = Union[JsonScalar, list["JsonValue"], dict[str, "JsonValue"]]
JsonPayload = dict[str, JsonValue]


def normalize_value(value: Any) -> JsonValue:
    """Convert ``value`` into a JSON-safe value."""

    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, Enum):
        return normalize_value(value.value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return normalize_payload(
            {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
        )
    if isinstance(value, Mapping):
        return normalize_payload(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value, key=str) if isinstance(value, (set, frozenset)) else value
        return [normalize_value(item) for item in items]
    return str(value)


def normalize_payload(payload: Mapping[str, Any] | None) -> JsonPayload | None:
    """Return an insertion-ordered, JSON-safe copy of ``payload``."""

    if payload is None:
        return None
    return {str(key): normalize_value(value) for key, value in payload.items()}


def snapshot(entity: Any, *, exclude: tuple[str, ...] = ()) -> JsonPayload:
    """Return a JSON-safe snapshot of a domain dataclass."""

    values = {
        f.name: getattr(entity, f.name)
        for f in dataclasses.fields(entity)
        if f.name not in exclude
    }
    return normalize_payload(values) or {}


__all__ = [
    "JsonPayload",
    "JsonScalar",
    "JsonValue",
    "normalize_payload",
    "normalize_value",
    "snapshot",
]
