from reportdesk.application.documents.kinds import REPORT
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied
from reportdesk.domain.lifecycle.report import REPORT_COMPLETED, next_report_status
from reportdesk.models.base import utc_now
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def _load_for_decision(report_id, event):
    actor = current_actor()
    if not actor.is_admin:
        raise PermissionDenied(f"Only administrators can {event} reports")

    report = REPORT.load_for(report_id, actor)
    return actor, report, next_report_status(report.status, event)


def approve_report(*, report_id: str):
    """in_progress → completed. Stamps who approved it and when."""
    actor, report, to_status = _load_for_decision(report_id, "approve")

    with transactional():
        report.status = to_status
        report.approved_by = actor.user_id
        report.approved_at = utc_now()

        log_action(
            action="report.approve",
            entity_type="report",
            entity_id=report.id,
            payload={"status": REPORT_COMPLETED},
        )

    return report


def reject_report(*, report_id: str, reason: str | None = None):
    """in_progress → draft. Blocks and metadata are kept for rework."""
    actor, report, to_status = _load_for_decision(report_id, "reject")

    with transactional():
        report.status = to_status
        report.submitted_for_approval = False

        log_action(
            action="report.reject",
            entity_type="report",
            entity_id=report.id,
            payload={"status": to_status, "reason": reason},
        )

    return report
