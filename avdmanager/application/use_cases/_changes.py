"""Helpers for applying partial updates to domain dataclasses."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any, TypeVar

EntityT = TypeVar("EntityT")


def apply_changes(
    entity: EntityT,
    changes: Mapping[str, Any],
    *,
    allowed: Iterable[str],
    required: Iterable[str] = (),
) -> tuple[EntityT, dict[str, dict[str, Any]]]:
    """Return ``entity`` with ``changes`` applied and the effective diff.

    The diff maps each field whose value actually changed to its ``old`` and
    ``new`` values. Unknown fields, and ``None`` for a ``required`` field,
    raise :class:`ValueError`.
    """

    allowed = set(allowed)
    unknown = sorted(set(changes) - allowed)
    if unknown:
        raise ValueError(f"Fields cannot be updated: {', '.join(unknown)}")
    nulled = sorted(name for name in required if name in changes and changes[name] is None)
    if nulled:
        raise ValueError(f"Fields cannot be empty: {', '.join(nulled)}")

    updated = replace(entity, **dict(changes))
    diff = {
        name: {"old": getattr(entity, name), "new": getattr(updated, name)}
        for name in changes
        if getattr(entity, name) != getattr(updated, name)
    }
    return updated, diff


def split_diff(diff: Mapping[str, Mapping[str, Any]]) -> tuple[dict, dict]:
    """Split a diff into ``(old_value, new_value)`` payloads for the audit log."""

    return (
        {name: values["old"] for name, values in diff.items()},
        {name: values["new"] for name, values in diff.items()},
    )


__all__ = ["apply_changes", "split_diff"]
