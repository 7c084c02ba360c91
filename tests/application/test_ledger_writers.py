"""Tests for the change ledger and audit log writers."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy.exc import OperationalError

from avdmanager.application.errors import NotFoundError
from avdmanager.application.use_cases.audit_logs import (
    list_audit_logs,
    list_entity_audit_logs,
    record_audit_event,
)
from avdmanager.application.use_cases.template_history import (
    append_template_history,
    list_template_history,
)
from avdmanager.application.use_cases.templates import (
    delete_template,
    get_template,
    update_template_status,
)
from avdmanager.domain.entities import (
    AuditLogFilters,
    RequestMetadata,
    TemplateHistoryAction,
    TemplateStatus,
)
from avdmanager.infrastructure.repositories import (
    AuditLogRepository,
    TemplateHistoryRepository,
)


def _failing_create(self, entry):
    raise OperationalError("INSERT", {}, Exception("database is locked"))


def test_append_template_history_persists_entry(db_session, actor, make_template):
    template = make_template()

    result = append_template_history(
        db_session,
        template_id=template.id,
        action=TemplateHistoryAction.UPDATED,
        actor=actor,
        old_status=TemplateStatus.DRAFT,
        new_status=TemplateStatus.IN_REVIEW,
        changes={"name": {"old": "a", "new": "b"}},
        comment="renamed",
    )

    assert result.ok and result.error is None
    latest = list_template_history(db_session, template.id)[0]
    assert latest.action is TemplateHistoryAction.UPDATED
    assert latest.changes == {"name": {"old": "a", "new": "b"}}
    assert latest.comment == "renamed"
    assert latest.user_id == actor.id
    assert latest.user_name == actor.name
    # statuses are only kept on STATUS_CHANGED entries
    assert latest.old_status is None and latest.new_status is None


def test_append_template_history_failure_is_reported_not_raised(
    db_session, actor, make_template, monkeypatch, caplog
):
    template = make_template()
    monkeypatch.setattr(TemplateHistoryRepository, "create", _failing_create)

    with caplog.at_level(logging.ERROR):
        result = append_template_history(
            db_session,
            template_id=template.id,
            action=TemplateHistoryAction.UPDATED,
            actor=actor,
        )

    assert not result.ok
    assert "database is locked" in result.error
    assert "Failed to record UPDATED history" in caplog.text
    # the session is still usable after the rollback
    assert get_template(db_session, template.id).name == template.name


def test_append_template_history_rejects_unknown_action_without_raising(
    db_session, actor, make_template, caplog
):
    template = make_template()
    history_before = len(list_template_history(db_session, template.id))

    with caplog.at_level(logging.ERROR):
        result = append_template_history(
            db_session,
            template_id=template.id,
            action="BOGUS",
            actor=actor,
        )

    assert not result.ok
    assert "BOGUS" in result.error
    assert "Failed to record BOGUS history" in caplog.text
    assert len(list_template_history(db_session, template.id)) == history_before


def test_record_audit_event_normalises_payloads_and_metadata(db_session, actor):
    result = record_audit_event(
        db_session,
        actor=actor,
        action="TEMPLATE_STATUS_CHANGED",
        entity_type="Template",
        entity_id=42,
        entity_name="Finance Pooled Desktop",
        details={"old_status": TemplateStatus.DRAFT, "new_status": TemplateStatus.IN_REVIEW},
        request=RequestMetadata(ip_address="10.0.0.8", user_agent="pytest"),
    )

    assert result.ok
    entry = list_entity_audit_logs(db_session, "Template", "42")[0]
    assert entry.entity_id == "42"
    assert entry.details == {"old_status": "DRAFT", "new_status": "IN_REVIEW"}
    assert entry.ip_address == "10.0.0.8"
    assert entry.user_agent == "pytest"
    assert entry.admin_email == "admin@example.com"


def test_record_audit_event_failure_is_reported_not_raised(
    db_session, actor, monkeypatch, caplog
):
    monkeypatch.setattr(AuditLogRepository, "create", _failing_create)

    with caplog.at_level(logging.ERROR):
        result = record_audit_event(db_session, actor=actor, action="LOGIN")

    assert not result.ok
    assert "Failed to record audit event LOGIN" in caplog.text


def test_status_change_survives_ledger_failures(
    db_session, actor, make_template, monkeypatch
):
    template = make_template()
    history_before = len(list_template_history(db_session, template.id))
    monkeypatch.setattr(TemplateHistoryRepository, "create", _failing_create)
    monkeypatch.setattr(AuditLogRepository, "create", _failing_create)

    updated = update_template_status(
        db_session, template_id=template.id, status=TemplateStatus.IN_REVIEW, actor=actor
    )

    assert updated.status is TemplateStatus.IN_REVIEW
    monkeypatch.undo()
    assert get_template(db_session, template.id).status is TemplateStatus.IN_REVIEW
    assert len(list_template_history(db_session, template.id)) == history_before


def test_list_template_history_for_missing_template(db_session):
    with pytest.raises(NotFoundError):
        list_template_history(db_session, 999)


def test_audit_entries_outlive_deleted_template(db_session, actor, make_template):
    template = make_template()

    delete_template(db_session, template_id=template.id, actor=actor)

    trail = list_entity_audit_logs(db_session, "Template", str(template.id))
    assert [entry.action for entry in trail] == ["TEMPLATE_DELETED", "TEMPLATE_CREATED"]
    assert trail[0].old_value["name"] == template.name
    with pytest.raises(NotFoundError):
        list_template_history(db_session, template.id)


def test_list_audit_logs_filters_and_paginates(db_session, actor):
    for index in range(5):
        record_audit_event(
            db_session,
            actor=actor,
            action="CONTACT_CREATED" if index % 2 else "APPLICATION_CREATED",
            entity_type="Contact" if index % 2 else "Application",
            entity_id=index,
        )

    page = list_audit_logs(
        db_session, filters=AuditLogFilters(action="APPLICATION_CREATED"), page=1, page_size=2
    )
    assert page.total == 3
    assert page.total_pages == 2
    assert [entry.entity_id for entry in page.items] == ["4", "2"]

    second = list_audit_logs(
        db_session, filters=AuditLogFilters(action="APPLICATION_CREATED"), page=2, page_size=2
    )
    assert [entry.entity_id for entry in second.items] == ["0"]

    with pytest.raises(ValueError):
        list_audit_logs(db_session, page=0)
