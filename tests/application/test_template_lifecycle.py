"""Template workflow, region rules and attachment ordering."""

from __future__ import annotations

import pytest

from avdmanager.application.errors import (
    ConflictError,
    InvalidStatusTransitionError,
    NotFoundError,
)
from avdmanager.application.use_cases.template_history import list_template_history
from avdmanager.application.use_cases.templates import (
    InstallOrderChange,
    add_template_application,
    duplicate_template,
    get_template,
    list_template_applications,
    reorder_template_applications,
    update_template,
    update_template_application,
    update_template_status,
)
from avdmanager.domain.entities import (
    AppApprovalStatus,
    TemplateHistoryAction,
    TemplateStatus,
)
from avdmanager.infrastructure.repositories import TemplateApplicationRepository


def _move(db_session, actor, template_id, *statuses):
    template = None
    for status in statuses:
        template = update_template_status(
            db_session, template_id=template_id, status=status, actor=actor
        )
    return template


def _orders(db_session, template_id):
    return {
        entry.application_id: entry.install_order
        for entry in list_template_applications(db_session, template_id)
    }


def test_full_lifecycle_is_recorded_newest_first(db_session, actor, make_template):
    template = make_template()
    assert template.status is TemplateStatus.DRAFT
    assert template.request_date is not None

    final = _move(
        db_session,
        actor,
        template.id,
        TemplateStatus.IN_REVIEW,
        TemplateStatus.APPROVED,
        TemplateStatus.DEPLOYED,
        TemplateStatus.DEPRECATED,
    )

    assert final.status is TemplateStatus.DEPRECATED
    assert final.approved_date is not None
    assert final.deployed_date is not None
    assert final.deprecated_date is not None

    history = list_template_history(db_session, template.id)
    assert [entry.action for entry in history] == [
        TemplateHistoryAction.STATUS_CHANGED,
        TemplateHistoryAction.STATUS_CHANGED,
        TemplateHistoryAction.STATUS_CHANGED,
        TemplateHistoryAction.STATUS_CHANGED,
        TemplateHistoryAction.CREATED,
    ]
    assert (history[0].old_status, history[0].new_status) == (
        TemplateStatus.DEPLOYED,
        TemplateStatus.DEPRECATED,
    )
    assert history[-1].changes["status"] == "DRAFT"


def test_rejected_transition_leaves_template_untouched(db_session, actor, make_template):
    template = make_template()
    _move(db_session, actor, template.id, TemplateStatus.IN_REVIEW, TemplateStatus.APPROVED)
    history_before = len(list_template_history(db_session, template.id))

    with pytest.raises(InvalidStatusTransitionError) as excinfo:
        update_template_status(
            db_session, template_id=template.id, status=TemplateStatus.DRAFT, actor=actor
        )

    assert "APPROVED" in str(excinfo.value) and "DRAFT" in str(excinfo.value)
    assert get_template(db_session, template.id).status is TemplateStatus.APPROVED
    assert len(list_template_history(db_session, template.id)) == history_before


def test_deprecated_is_terminal(db_session, actor, make_template):
    template = make_template()
    _move(
        db_session,
        actor,
        template.id,
        TemplateStatus.IN_REVIEW,
        TemplateStatus.APPROVED,
        TemplateStatus.DEPLOYED,
        TemplateStatus.DEPRECATED,
    )

    with pytest.raises(InvalidStatusTransitionError):
        update_template_status(
            db_session, template_id=template.id, status=TemplateStatus.DEPLOYED, actor=actor
        )


def test_approved_date_is_kept_when_reapproved(db_session, actor, make_template):
    template = make_template()
    first = _move(db_session, actor, template.id, TemplateStatus.IN_REVIEW, TemplateStatus.APPROVED)

    again = _move(
        db_session, actor, template.id, TemplateStatus.IN_REVIEW, TemplateStatus.APPROVED
    )

    assert again.approved_date == first.approved_date


def test_status_comment_lands_in_history(db_session, actor, make_template):
    template = make_template()

    update_template_status(
        db_session,
        template_id=template.id,
        status=TemplateStatus.IN_REVIEW,
        actor=actor,
        comment="Ready for review",
    )

    assert list_template_history(db_session, template.id)[0].comment == "Ready for review"


def test_primary_region_must_be_listed_on_create(make_template):
    with pytest.raises(ValueError):
        make_template(regions=["westus"], primary_region="eastus")
    with pytest.raises(ValueError):
        make_template(regions=[], primary_region="eastus")


def test_primary_region_must_stay_listed_on_update(db_session, actor, make_template):
    template = make_template()

    with pytest.raises(ValueError):
        update_template(
            db_session, template_id=template.id, changes={"regions": ["westus"]}, actor=actor
        )

    moved = update_template(
        db_session,
        template_id=template.id,
        changes={"regions": ["westus"], "primary_region": "westus"},
        actor=actor,
    )
    assert moved.regions == ["westus"]
    assert moved.primary_region == "westus"


def test_update_records_diff_and_skips_noop(db_session, actor, make_template):
    template = make_template()

    update_template(
        db_session, template_id=template.id, changes={"notes": "Pilot group"}, actor=actor
    )
    update_template(
        db_session, template_id=template.id, changes={"notes": "Pilot group"}, actor=actor
    )

    history = list_template_history(db_session, template.id)
    assert [entry.action for entry in history] == [
        TemplateHistoryAction.UPDATED,
        TemplateHistoryAction.CREATED,
    ]
    assert history[0].changes == {"notes": {"old": None, "new": "Pilot group"}}


def test_update_rejects_status_and_unknown_references(db_session, actor, make_template):
    template = make_template()

    with pytest.raises(ValueError):
        update_template(
            db_session, template_id=template.id, changes={"status": "APPROVED"}, actor=actor
        )
    with pytest.raises(NotFoundError):
        update_template(
            db_session, template_id=template.id, changes={"base_image_id": 404}, actor=actor
        )


def test_attach_appends_and_rejects_duplicates(
    db_session, actor, make_template, make_application
):
    template = make_template()
    office = make_application("office-365")
    teams = make_application("teams")

    first = add_template_application(
        db_session, template_id=template.id, application_id=office.id, actor=actor
    )
    second = add_template_application(
        db_session, template_id=template.id, application_id=teams.id, actor=actor
    )
    assert (first.install_order, second.install_order) == (0, 1)
    assert first.approval_status is AppApprovalStatus.PENDING

    with pytest.raises(ConflictError):
        add_template_application(
            db_session, template_id=template.id, application_id=office.id, actor=actor
        )
    assert len(list_template_applications(db_session, template.id)) == 2


def test_attach_race_on_same_pair_is_a_conflict(
    db_session, actor, make_template, make_application, monkeypatch
):
    template = make_template()
    office = make_application("office-365")
    add_template_application(
        db_session, template_id=template.id, application_id=office.id, actor=actor
    )
    # a concurrent request that already passed the existence check
    monkeypatch.setattr(TemplateApplicationRepository, "get", lambda self, *args: None)

    with pytest.raises(ConflictError, match="already exists"):
        add_template_application(
            db_session, template_id=template.id, application_id=office.id, actor=actor
        )

    monkeypatch.undo()
    assert len(list_template_applications(db_session, template.id)) == 1


def test_attach_rejects_taken_install_order(
    db_session, actor, make_template, make_application
):
    template = make_template()
    office = make_application("office-365")
    teams = make_application("teams")
    add_template_application(
        db_session, template_id=template.id, application_id=office.id, actor=actor, install_order=5
    )

    with pytest.raises(ConflictError):
        add_template_application(
            db_session,
            template_id=template.id,
            application_id=teams.id,
            actor=actor,
            install_order=5,
        )


def test_reorder_swaps_orders(db_session, actor, make_template, make_application):
    template = make_template()
    office = make_application("office-365")
    teams = make_application("teams")
    for app in (office, teams):
        add_template_application(
            db_session, template_id=template.id, application_id=app.id, actor=actor
        )

    result = reorder_template_applications(
        db_session,
        template_id=template.id,
        changes=[
            InstallOrderChange(application_id=office.id, install_order=1),
            InstallOrderChange(application_id=teams.id, install_order=0),
        ],
        actor=actor,
    )

    assert [entry.application_id for entry in result] == [teams.id, office.id]


def test_reorder_is_all_or_nothing(db_session, actor, make_template, make_application):
    template = make_template()
    office = make_application("office-365")
    teams = make_application("teams")
    chrome = make_application("chrome")
    for app in (office, teams):
        add_template_application(
            db_session, template_id=template.id, application_id=app.id, actor=actor
        )
    before = _orders(db_session, template.id)

    with pytest.raises(NotFoundError):
        reorder_template_applications(
            db_session,
            template_id=template.id,
            changes=[
                InstallOrderChange(application_id=office.id, install_order=7),
                InstallOrderChange(application_id=chrome.id, install_order=8),
            ],
            actor=actor,
        )
    with pytest.raises(ConflictError):
        reorder_template_applications(
            db_session,
            template_id=template.id,
            changes=[InstallOrderChange(application_id=office.id, install_order=1)],
            actor=actor,
        )

    assert _orders(db_session, template.id) == before


def test_approving_attachment_stamps_approver(
    db_session, actor, make_template, make_application
):
    template = make_template()
    office = make_application("office-365")
    add_template_application(
        db_session, template_id=template.id, application_id=office.id, actor=actor
    )

    approved = update_template_application(
        db_session,
        template_id=template.id,
        application_id=office.id,
        changes={"approval_status": AppApprovalStatus.APPROVED},
        actor=actor,
    )
    assert approved.approved_by_id == actor.id
    assert approved.approved_at is not None

    denied = update_template_application(
        db_session,
        template_id=template.id,
        application_id=office.id,
        changes={"approval_status": AppApprovalStatus.DENIED, "approval_notes": "Licensing"},
        actor=actor,
    )
    assert denied.approved_by_id is None
    assert denied.approved_at is None


def test_duplicate_copies_configuration_and_attachments(
    db_session, actor, make_template, make_application
):
    template = make_template(tags={"cost-center": "1001"})
    office = make_application("office-365")
    add_template_application(
        db_session, template_id=template.id, application_id=office.id, actor=actor
    )
    update_template_application(
        db_session,
        template_id=template.id,
        application_id=office.id,
        changes={"approval_status": AppApprovalStatus.APPROVED},
        actor=actor,
    )
    _move(db_session, actor, template.id, TemplateStatus.IN_REVIEW, TemplateStatus.APPROVED)

    copy = duplicate_template(db_session, template_id=template.id, actor=actor)

    assert copy.id != template.id
    assert copy.name == "Finance Pooled Desktop (Copy)"
    assert copy.status is TemplateStatus.DRAFT
    assert copy.approved_date is None
    assert copy.regions == ["eastus", "westus"]
    assert copy.tags == {"cost-center": "1001"}
    assert [entry.application_id for entry in copy.applications] == [office.id]
    assert copy.applications[0].approval_status is AppApprovalStatus.PENDING

    history = list_template_history(db_session, copy.id)
    assert len(history) == 1
    assert history[0].comment == "Duplicated from template: Finance Pooled Desktop"
