from typing import Any, Dict, Optional

from reportdesk.application.documents.clone_document import copy_document
from reportdesk.application.documents.kinds import INVOICE, INVOICE_TEMPLATE
from reportdesk.application.documents.save_document import parse_metadata
from reportdesk.application.templates.invoice_template import get_invoice_template
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied


def create_invoice(*, data: Optional[Dict[str, Any]] = None):
    """New draft invoice pre-filled with the default invoice template's blocks."""
    actor = current_actor()
    if not actor.role.is_active:
        raise PermissionDenied("Your account is inactive. Ask an administrator for access.")

    values = parse_metadata(INVOICE, data or {})
    template = get_invoice_template()

    return copy_document(
        source_kind=INVOICE_TEMPLATE,
        source=template,
        target_kind=INVOICE,
        actor=actor,
        overrides=values,
        action="invoice.create",
    )
