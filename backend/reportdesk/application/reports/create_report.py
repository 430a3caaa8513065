from typing import Any, Dict, Optional

from reportdesk.application.documents.clone_document import instantiate_from_template
from reportdesk.application.documents.kinds import REPORT, TEMPLATE
from reportdesk.application.documents.save_document import parse_metadata
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied
from reportdesk.domain.lifecycle.report import REPORT_DRAFT
from reportdesk.extensions import db
from reportdesk.models.report import Report
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def create_report(*, data: Optional[Dict[str, Any]] = None) -> Report:
    """
    Create a draft report owned by the current user.

    With a ``template_id`` the report starts from that template's blocks;
    otherwise it starts empty.
    """
    data = dict(data or {})
    template_id = data.pop("template_id", None)

    actor = current_actor()
    if not actor.role.is_active:
        raise PermissionDenied("Your account is inactive. Ask an administrator for access.")

    values = parse_metadata(REPORT, data)

    if template_id:
        return instantiate_from_template(
            template_kind=TEMPLATE,
            template_id=template_id,
            target_kind=REPORT,
            overrides=values,
        )

    report = Report()
    for field, value in values.items():
        setattr(report, field, value)
    report.title = report.title or "Untitled Report"
    report.status = REPORT_DRAFT
    report.submitted_for_approval = False
    report.user_id = actor.user_id

    with transactional():
        db.session.add(report)
        db.session.flush()  # ensures report.id

        log_action(
            action="report.create",
            entity_type="report",
            entity_id=report.id,
            payload={"title": report.title},
        )

    return report
