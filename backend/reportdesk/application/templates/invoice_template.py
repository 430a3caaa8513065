from reportdesk.domain.lifecycle.template import TEMPLATE_PUBLISHED
from reportdesk.extensions import db
from reportdesk.models.template import InvoiceTemplate
from reportdesk.utils.transaction import transactional


def get_invoice_template() -> InvoiceTemplate:
    """
    The default invoice content. Created empty on first use; there is only
    ever one.
    """
    template = InvoiceTemplate.query.order_by(InvoiceTemplate.created_at.asc()).first()
    if template is not None:
        return template

    template = InvoiceTemplate()
    template.title = "Default Invoice"
    template.status = TEMPLATE_PUBLISHED

    with transactional():
        db.session.add(template)
        db.session.flush()

    return template
