"""Status transition rules for templates.

The workflow is data: one table lists the states reachable from each state
and another names the lifecycle date stamped when a state is entered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from avdmanager.domain.entities.enums import TemplateStatus

INITIAL_STATUS = TemplateStatus.DRAFT

STATUS_TRANSITIONS: Mapping[TemplateStatus, frozenset[TemplateStatus]] = MappingProxyType(
    {
        TemplateStatus.DRAFT: frozenset({TemplateStatus.IN_REVIEW}),
        TemplateStatus.IN_REVIEW: frozenset(
            {TemplateStatus.APPROVED, TemplateStatus.DRAFT}
        ),
        TemplateStatus.APPROVED: frozenset(
            {TemplateStatus.DEPLOYED, TemplateStatus.IN_REVIEW}
        ),
        TemplateStatus.DEPLOYED: frozenset({TemplateStatus.DEPRECATED}),
        TemplateStatus.DEPRECATED: frozenset(),
    }
)

STATUS_DATE_FIELDS: Mapping[TemplateStatus, str] = MappingProxyType(
    {
        TemplateStatus.APPROVED: "approved_date",
        TemplateStatus.DEPLOYED: "deployed_date",
        TemplateStatus.DEPRECATED: "deprecated_date",
    }
)


@dataclass(frozen=True)
class StatusTransition:
    """Decision returned by :func:`evaluate_status_transition`."""

    current: TemplateStatus
    requested: TemplateStatus
    allowed: bool
    date_field: str | None = None
    reason: str | None = None


def allowed_transitions(current: TemplateStatus | str) -> frozenset[TemplateStatus]:
    """Return the states reachable from ``current``."""

    return STATUS_TRANSITIONS[TemplateStatus(current)]


def evaluate_status_transition(
    current: TemplateStatus | str, requested: TemplateStatus | str
) -> StatusTransition:
    """Decide whether ``current`` may move to ``requested``.

    The decision carries the name of the date attribute to stamp when the
    transition is allowed. Stamping only happens while that attribute is
    unset, which the caller enforces; backward moves never clear dates.
    """

    current = TemplateStatus(current)
    requested = TemplateStatus(requested)

    if requested == current:
        return StatusTransition(
            current=current,
            requested=requested,
            allowed=False,
            reason=f"Template is already in status {current.value}",
        )

    if requested not in STATUS_TRANSITIONS[current]:
        allowed = sorted(status.value for status in STATUS_TRANSITIONS[current])
        if allowed:
            hint = f"allowed: {', '.join(allowed)}"
        else:
            hint = f"{current.value} is a terminal status"
        return StatusTransition(
            current=current,
            requested=requested,
            allowed=False,
            reason=(
                f"Cannot change status from {current.value} to {requested.value} ({hint})"
            ),
        )

    return StatusTransition(
        current=current,
        requested=requested,
        allowed=True,
        date_field=STATUS_DATE_FIELDS.get(requested),
    )


__all__ = [
    "INITIAL_STATUS",
    "STATUS_DATE_FIELDS",
    "STATUS_TRANSITIONS",
    "StatusTransition",
    "allowed_transitions",
    "evaluate_status_transition",
]
