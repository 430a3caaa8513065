from reportdesk.application.documents.kinds import INVOICE
from reportdesk.auth_context import current_actor
from reportdesk.domain.lifecycle.invoice import INVOICE_SUBMITTED, assert_invoice_transition
from reportdesk.models.base import utc_now
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def submit_invoice(*, invoice_id: str):
    """draft → submitted. Submitted invoices are read-only to staff."""
    actor = current_actor()
    invoice = INVOICE.load_for(invoice_id, actor)
    INVOICE.assert_can_edit(invoice, actor)

    assert_invoice_transition(from_status=invoice.status, to_status=INVOICE_SUBMITTED)

    with transactional():
        invoice.status = INVOICE_SUBMITTED
        invoice.submitted_at = utc_now()

        log_action(
            action="invoice.submit",
            entity_type="invoice",
            entity_id=invoice.id,
            payload={"status": INVOICE_SUBMITTED},
        )

    return invoice
