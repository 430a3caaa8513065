"""Report, invoice and template state machines; roles and edit guards."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from reportdesk.domain.lifecycle.invoice import assert_invoice_transition
from reportdesk.domain.lifecycle.report import (
    REPORT_COMPLETED,
    REPORT_DRAFT,
    REPORT_IN_PROGRESS,
    IllegalTransition,
    assert_report_transition,
    next_report_status,
)
from reportdesk.domain.lifecycle.template import assert_template_transition
from reportdesk.domain.permissions import can_edit_invoice, can_edit_report, can_edit_template
from reportdesk.domain.roles import Role, can_manage_role


class TestReportStateMachine:
    def test_happy_path(self):
        status = next_report_status(REPORT_DRAFT, "submit")
        assert status == REPORT_IN_PROGRESS
        assert next_report_status(status, "approve") == REPORT_COMPLETED

    def test_reject_returns_to_draft(self):
        assert next_report_status(REPORT_IN_PROGRESS, "reject") == REPORT_DRAFT

    def test_completed_only_via_in_progress(self):
        with pytest.raises(IllegalTransition):
            assert_report_transition(from_status=REPORT_DRAFT, to_status=REPORT_COMPLETED)
        with pytest.raises(IllegalTransition):
            next_report_status(REPORT_DRAFT, "approve")

    @pytest.mark.parametrize("event", ["submit", "approve", "reject"])
    def test_completed_is_terminal(self, event):
        with pytest.raises(IllegalTransition):
            next_report_status(REPORT_COMPLETED, event)

    def test_unknown_event(self):
        with pytest.raises(IllegalTransition):
            next_report_status(REPORT_DRAFT, "archive")

    def test_illegal_transition_is_a_conflict(self):
        assert IllegalTransition.status_code == 409


def test_invoice_submitted_is_terminal():
    assert_invoice_transition(from_status="draft", to_status="submitted")
    with pytest.raises(IllegalTransition):
        assert_invoice_transition(from_status="submitted", to_status="draft")


def test_templates_toggle_between_draft_and_published():
    assert_template_transition(from_status="draft", to_status="published")
    assert_template_transition(from_status="published", to_status="draft")
    with pytest.raises(IllegalTransition):
        assert_template_transition(from_status="published", to_status="published")


class TestRoles:
    def test_missing_or_unknown_role_is_inactive(self):
        assert Role.from_value(None) is Role.INACTIVE
        assert Role.from_value("owner") is Role.INACTIVE
        assert Role.from_value("staff") is Role.STAFF

    def test_admin_flags(self):
        assert Role.SUPER_ADMIN.is_admin and Role.ADMIN.is_admin
        assert not Role.STAFF.is_admin
        assert not Role.INACTIVE.is_active

    def test_who_manages_whom(self):
        assert can_manage_role(Role.SUPER_ADMIN, Role.ADMIN)
        assert can_manage_role(Role.ADMIN, Role.STAFF)
        assert can_manage_role(Role.ADMIN, Role.INACTIVE)
        assert not can_manage_role(Role.ADMIN, Role.ADMIN)
        assert not can_manage_role(Role.ADMIN, Role.SUPER_ADMIN)
        assert not can_manage_role(Role.STAFF, Role.INACTIVE)


class TestEditGuards:
    @pytest.mark.parametrize("role, submitted, expected", [
        (Role.STAFF, False, True),
        (Role.STAFF, True, False),
        (Role.ADMIN, True, True),
        (Role.SUPER_ADMIN, True, True),
        (Role.INACTIVE, False, False),
    ])
    def test_report(self, role, submitted, expected):
        report = SimpleNamespace(submitted_for_approval=submitted)
        assert can_edit_report(report, role) is expected

    def test_invoice(self):
        assert can_edit_invoice(SimpleNamespace(status="draft"), Role.STAFF)
        assert not can_edit_invoice(SimpleNamespace(status="submitted"), Role.STAFF)
        assert can_edit_invoice(SimpleNamespace(status="submitted"), Role.ADMIN)

    def test_template_is_admin_only(self):
        template = SimpleNamespace(status="published")
        assert can_edit_template(template, Role.ADMIN)
        assert not can_edit_template(template, Role.STAFF)
