"""Tests for the template status workflow table."""

from __future__ import annotations

from itertools import product

import pytest

from avdmanager.domain.entities import TemplateStatus
from avdmanager.domain.template_status import (
    INITIAL_STATUS,
    STATUS_DATE_FIELDS,
    allowed_transitions,
    evaluate_status_transition,
)

S = TemplateStatus

EXPECTED_ALLOWED = {
    (S.DRAFT, S.IN_REVIEW),
    (S.IN_REVIEW, S.APPROVED),
    (S.IN_REVIEW, S.DRAFT),
    (S.APPROVED, S.DEPLOYED),
    (S.APPROVED, S.IN_REVIEW),
    (S.DEPLOYED, S.DEPRECATED),
}


@pytest.mark.parametrize("current,requested", list(product(S, S)))
def test_every_status_pair_matches_the_workflow(current, requested):
    decision = evaluate_status_transition(current, requested)

    assert decision.current is current
    assert decision.requested is requested
    assert decision.allowed is ((current, requested) in EXPECTED_ALLOWED)
    if decision.allowed:
        assert decision.reason is None
        assert decision.date_field == STATUS_DATE_FIELDS.get(requested)
    else:
        assert decision.reason
        assert decision.date_field is None


def test_same_status_is_rejected_with_reason():
    decision = evaluate_status_transition(S.IN_REVIEW, S.IN_REVIEW)

    assert not decision.allowed
    assert decision.reason == "Template is already in status IN_REVIEW"


def test_deprecated_is_terminal():
    assert allowed_transitions(S.DEPRECATED) == frozenset()
    decision = evaluate_status_transition(S.DEPRECATED, S.DRAFT)
    assert "terminal" in decision.reason


def test_rejection_lists_allowed_targets():
    decision = evaluate_status_transition(S.APPROVED, S.DRAFT)

    assert decision.reason == (
        "Cannot change status from APPROVED to DRAFT (allowed: DEPLOYED, IN_REVIEW)"
    )


def test_date_fields_only_for_forward_milestones():
    assert evaluate_status_transition(S.IN_REVIEW, S.APPROVED).date_field == "approved_date"
    assert evaluate_status_transition(S.APPROVED, S.DEPLOYED).date_field == "deployed_date"
    assert (
        evaluate_status_transition(S.DEPLOYED, S.DEPRECATED).date_field
        == "deprecated_date"
    )
    assert evaluate_status_transition(S.APPROVED, S.IN_REVIEW).date_field is None
    assert evaluate_status_transition(S.DRAFT, S.IN_REVIEW).date_field is None


def test_accepts_raw_values_and_draft_is_never_reentered_from_later_states():
    assert evaluate_status_transition("DRAFT", "IN_REVIEW").allowed
    assert INITIAL_STATUS is S.DRAFT
    for status in (S.APPROVED, S.DEPLOYED, S.DEPRECATED):
        assert S.DRAFT not in allowed_transitions(status)


def test_unknown_status_raises_value_error():
    with pytest.raises(ValueError):
        evaluate_status_transition("DRAFT", "PUBLISHED")
