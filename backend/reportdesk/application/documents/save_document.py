from typing import Any, Dict, List, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from reportdesk.application.blocks.editor import BlockEditor
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import DomainError, ValidationError
from reportdesk.extensions import db
from reportdesk.models.knowledge_base import ReportType
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def parse_metadata(kind, data: Dict[str, Any]) -> Dict[str, Any]:
    updates = {}
    for field, parser in kind.fields.items():
        if field in data:
            updates[field] = parser(data[field], field)

    for field in kind.required_fields:
        if field in updates and not updates[field]:
            raise ValidationError(f"{field.replace('_', ' ').capitalize()} is required")

    report_type_id = updates.get("report_type_id")
    if report_type_id and db.session.get(ReportType, report_type_id) is None:
        raise ValidationError("Unknown report type")

    return updates


def _parse_block_edits(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    edits = data.get("blocks") or []
    if not isinstance(edits, list) or not all(
        isinstance(edit, dict) and edit.get("id") and "content" in edit for edit in edits
    ):
        raise ValidationError("blocks must be a list of {id, content} objects")
    return edits


def save_document(
    *,
    kind,
    document_id: str,
    data: Dict[str, Any],
) -> Tuple[Any, List[Dict[str, str]]]:
    """
    Persist the metadata form and any pending block content edits.

    Rules:
    - Only whitelisted fields are mutable
    - No silent no-op saves
    - Each block edit is its own write; a failed block is reported back
      and does not undo the others
    """
    actor = current_actor()
    document = kind.load_for(document_id, actor)
    kind.assert_can_edit(document, actor)

    updates = parse_metadata(kind, data)
    block_edits = _parse_block_edits(data)

    if not updates and not block_edits:
        raise ValidationError("No valid fields provided for update")

    changed_fields: list[str] = []
    with transactional():
        for field, value in updates.items():
            if getattr(document, field) != value:
                setattr(document, field, value)
                changed_fields.append(field)

        if changed_fields:
            log_action(
                action=f"{kind.name}.update",
                entity_type=kind.name,
                entity_id=document.id,
                payload={"fields": changed_fields},
            )

    failed_blocks: List[Dict[str, str]] = []
    if block_edits:
        editor = BlockEditor(kind, document)
        for edit in block_edits:
            try:
                editor.update_block_content(edit["id"], edit["content"])
            except (DomainError, SQLAlchemyError) as exc:
                message = getattr(exc, "message", None) or "Failed to save block"
                current_app.logger.warning("Block %s not saved: %s", edit["id"], exc)
                failed_blocks.append({"id": edit["id"], "error": message})

    return document, failed_blocks
