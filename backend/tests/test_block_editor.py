"""Block store density and editor compensation against a real database."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import SQLAlchemyError

from reportdesk.application.blocks.editor import BlockEditor
from reportdesk.application.documents.kinds import REPORT
from reportdesk.application.reports.create_report import create_report
from reportdesk.domain.exceptions import NotFoundError, PermissionDenied, ValidationError
from reportdesk.domain.invariants.block import assert_block_order
from reportdesk.domain.invariants.exceptions import InvariantViolation
from reportdesk.extensions import db
from reportdesk.models.user import UserRole


def stored_orders(report_id):
    return [block.order_index for block in REPORT.store.list(report_id)]


def stored_types(report_id):
    return [block.type for block in REPORT.store.list(report_id)]


@pytest.fixture
def editor(users, signed_in):
    signed_in(users["staff"])
    report = create_report(data={"title": "Boiler"})
    return BlockEditor(REPORT, report)


class TestBlockStore:
    def test_create_rejects_missing_owner(self, app):
        with pytest.raises(ValidationError):
            REPORT.store.create("no-such-report", "text", {}, 0)

    def test_create_rejects_negative_order(self, editor):
        with pytest.raises(ValidationError):
            REPORT.store.create(editor.document.id, "text", {}, -1)

    def test_next_order_index(self, editor):
        assert REPORT.store.next_order_index(editor.document.id) == 0
        editor.add_block("text")
        editor.add_block("notes")
        assert REPORT.store.next_order_index(editor.document.id) == 2

    def test_update_missing_block(self, editor):
        with pytest.raises(NotFoundError):
            REPORT.store.update("gone", {"text": "x"})

    def test_update_order_only_touches_order(self, editor):
        block = editor.add_block("text", {"text": "keep me"})
        REPORT.store.update_order(block.id, 5, owner_id=editor.document.id)

        stored = REPORT.store.get(block.id)
        assert stored.order_index == 5
        assert stored.content == {"text": "keep me"}

        with pytest.raises(ValidationError):
            REPORT.store.update_order(block.id, -1)

    def test_renumber_requires_every_block(self, editor):
        first = editor.add_block("text")
        editor.add_block("notes")
        with pytest.raises(ValidationError):
            REPORT.store.renumber(editor.document.id, [first.id])


class TestOrderDensity:
    def test_add_delete_reorder_keeps_dense_order(self, editor):
        for block_type in ("heading", "text", "checklist", "notes", "image"):
            editor.add_block(block_type)

        editor.reorder(4, 0)
        editor.delete_block(editor.blocks[2].id)
        editor.reorder(0, 3)
        editor.delete_block(editor.blocks[0].id)
        editor.add_block("data_table")

        report_id = editor.document.id
        assert stored_orders(report_id) == [0, 1, 2, 3]
        assert_block_order(REPORT.store.list(report_id))
        assert [block.id for block in editor.blocks] == [block.id for block in REPORT.store.list(report_id)]

    def test_delete_then_create_appends_last(self, editor):
        for block_type in ("heading", "text", "checklist"):
            editor.add_block(block_type)

        editor.delete_block(editor.blocks[1].id)
        created = editor.add_block("notes")

        assert created.order_index == 2
        assert stored_types(editor.document.id) == ["heading", "checklist", "notes"]

    def test_move_over_by_ids(self, editor):
        a = editor.add_block("heading")
        b = editor.add_block("text")
        c = editor.add_block("checklist")

        editor.move_over(c.id, a.id)
        assert [block.id for block in REPORT.store.list(editor.document.id)] == [c.id, a.id, b.id]

    def test_move_over_without_target_is_a_no_op(self, editor):
        a = editor.add_block("heading")
        editor.add_block("text")
        editor.move_over(a.id, None)
        assert stored_types(editor.document.id) == ["heading", "text"]


class TestValidation:
    def test_invoice_only_type_rejected_for_reports(self, editor):
        with pytest.raises(InvariantViolation):
            editor.add_block("invoice_data")
        assert stored_orders(editor.document.id) == []

    def test_content_must_be_an_object(self, editor):
        block = editor.add_block("text")
        with pytest.raises(ValidationError):
            editor.update_block_content(block.id, "just a string")


class TestCompensation:
    def test_failed_reorder_reverts_local_state(self, editor, monkeypatch):
        for block_type in ("heading", "text", "checklist"):
            editor.add_block(block_type)
        before = list(editor.blocks)

        def broken_renumber(owner_id, ordered_ids):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(REPORT.store, "renumber", broken_renumber)

        with pytest.raises(SQLAlchemyError):
            editor.reorder(0, 2)

        assert editor.blocks == before
        assert stored_types(editor.document.id) == ["heading", "text", "checklist"]

    def test_failed_delete_puts_block_back(self, editor, monkeypatch):
        editor.add_block("heading")
        target = editor.add_block("text")
        before = list(editor.blocks)

        def broken_delete(block_id, owner_id=None):
            raise SQLAlchemyError("timeout")

        monkeypatch.setattr(REPORT.store, "delete", broken_delete)

        with pytest.raises(SQLAlchemyError):
            editor.delete_block(target.id)

        assert editor.blocks == before
        assert len(REPORT.store.list(editor.document.id)) == 2

    def test_failed_update_restores_previous_content(self, editor, monkeypatch):
        block = editor.add_block("text", {"text": "original"})

        def broken_update(block_id, content, owner_id=None):
            raise SQLAlchemyError("timeout")

        monkeypatch.setattr(REPORT.store, "update", broken_update)

        with pytest.raises(SQLAlchemyError):
            editor.update_block_content(block.id, {"text": "edited"})

        assert editor.find(block.id).content == {"text": "original"}


class TestFreshRoleCheck:
    def test_revoked_role_blocks_the_next_edit(self, editor, users):
        block = editor.add_block("text")

        UserRole.query.filter_by(user_id=users["staff"].id).delete()
        db.session.commit()

        with pytest.raises(PermissionDenied):
            editor.update_block_content(block.id, {"text": "too late"})
        assert REPORT.store.get(block.id).content == {"text": ""}
