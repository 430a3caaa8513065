from reportdesk.application.documents.kinds import REPORT
from reportdesk.auth_context import current_actor
from reportdesk.domain.invariants.document import assert_submittable
from reportdesk.domain.lifecycle.report import next_report_status
from reportdesk.models.base import utc_now
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def submit_report(*, report_id: str):
    """
    draft → in_progress.

    Locks the report against non-admin edits until an admin approves or
    rejects it.
    """
    actor = current_actor()
    report = REPORT.load_for(report_id, actor)
    # Illegal transitions answer the same for every role
    to_status = next_report_status(report.status, "submit")
    REPORT.assert_can_edit(report, actor)
    assert_submittable(report, REPORT.store.list(report.id))

    with transactional():
        report.status = to_status
        report.submitted_for_approval = True
        report.submitted_at = utc_now()

        log_action(
            action="report.submit",
            entity_type="report",
            entity_id=report.id,
            payload={"status": to_status},
        )

    return report
