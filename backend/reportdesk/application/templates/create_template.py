from typing import Any, Dict, Optional

from reportdesk.application.documents.kinds import TEMPLATE
from reportdesk.application.documents.save_document import parse_metadata
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied
from reportdesk.domain.lifecycle.template import TEMPLATE_DRAFT, TEMPLATE_PUBLISHED
from reportdesk.extensions import db
from reportdesk.models.template import ReportTemplate
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def create_template(*, data: Optional[Dict[str, Any]] = None) -> ReportTemplate:
    """New, empty draft template. Admin only."""
    actor = current_actor()
    if not actor.is_admin:
        raise PermissionDenied("Only administrators can manage templates")

    values = parse_metadata(TEMPLATE, data or {})

    template = ReportTemplate()
    for field, value in values.items():
        setattr(template, field, value)
    template.title = template.title or "New Template"
    template.status = TEMPLATE_DRAFT
    template.created_by = actor.user_id

    with transactional():
        db.session.add(template)
        db.session.flush()

        log_action(
            action="template.create",
            entity_type="template",
            entity_id=template.id,
            payload={"title": template.title},
        )

    return template


def list_templates():
    """Admins see every template; everyone else only published ones."""
    actor = current_actor()
    if not actor.role.is_active:
        raise PermissionDenied("Your account is inactive. Ask an administrator for access.")

    query = ReportTemplate.query
    if not actor.is_admin:
        query = query.filter(ReportTemplate.status == TEMPLATE_PUBLISHED)
    return query.order_by(ReportTemplate.created_at.desc()).all()
