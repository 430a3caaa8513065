from reportdesk.domain.lifecycle.invoice import INVOICE_DRAFT
from reportdesk.domain.roles import Role


def can_edit_report(report, role: Role) -> bool:
    if not role.is_active:
        return False
    return not report.submitted_for_approval or role.is_admin


def can_edit_invoice(invoice, role: Role) -> bool:
    if not role.is_active:
        return False
    return invoice.status == INVOICE_DRAFT or role.is_admin


def can_edit_template(template, role: Role) -> bool:
    return role.is_admin

