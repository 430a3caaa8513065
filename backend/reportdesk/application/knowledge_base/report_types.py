from typing import Any, Dict

from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import NotFoundError, ValidationError
from reportdesk.extensions import db
from reportdesk.models.knowledge_base import ReportType
from reportdesk.utils import media
from reportdesk.utils.audit import log_action
from reportdesk.utils.fields import parse_text
from reportdesk.utils.transaction import transactional


def get_report_type(report_type_id) -> ReportType:
    report_type = db.session.get(ReportType, report_type_id) if report_type_id else None
    if report_type is None:
        raise NotFoundError("Report type not found")
    return report_type


def list_report_types():
    return ReportType.query.order_by(ReportType.name.asc()).all()


def create_report_type(*, data: Dict[str, Any]) -> ReportType:
    name = parse_text(data.get("name"), "name")
    if not name:
        raise ValidationError("Name is required")

    report_type = ReportType()
    report_type.name = name
    report_type.description = parse_text(data.get("description"), "description")
    report_type.created_by = current_actor().user_id

    with transactional():
        db.session.add(report_type)
        db.session.flush()

        log_action(
            action="report_type.create",
            entity_type="report_type",
            entity_id=report_type.id,
            payload={"name": name},
        )

    return report_type


def update_report_type(*, report_type_id, data: Dict[str, Any]) -> ReportType:
    report_type = get_report_type(report_type_id)

    changed_fields = []
    for field in ("name", "description"):
        if field not in data:
            continue
        value = parse_text(data[field], field)
        if field == "name" and not value:
            raise ValidationError("Name is required")
        if getattr(report_type, field) != value:
            setattr(report_type, field, value)
            changed_fields.append(field)

    if not changed_fields:
        return report_type

    with transactional():
        log_action(
            action="report_type.update",
            entity_type="report_type",
            entity_id=report_type.id,
            payload={"fields": changed_fields},
        )

    return report_type


def delete_report_type(*, report_type_id) -> None:
    """Deletes the type and, through the cascade, its knowledge base documents."""
    report_type = get_report_type(report_type_id)
    paths = [document.file_path for document in report_type.documents]

    with transactional():
        db.session.delete(report_type)

        log_action(
            action="report_type.delete",
            entity_type="report_type",
            entity_id=report_type_id,
            payload={"documents": len(paths)},
        )

    media.remove(media.KNOWLEDGE_BASE_BUCKET, paths)
