from decimal import Decimal

from .block import normalize_block
from ._dates import iso

REPORT_FIELDS = (
    "title", "status", "submitted_for_approval", "client_name", "client_email",
    "job_number", "report_number", "location", "subject", "order_number",
    "technician", "report_type_id", "template_id", "user_id", "approved_by",
)
INVOICE_FIELDS = (
    "invoice_number", "status", "customer_name", "customer_company",
    "customer_email", "customer_phone", "purchase_order", "user_id",
)
TEMPLATE_FIELDS = (
    "title", "description", "category", "status", "created_by",
    "job_number", "report_number", "location", "subject", "order_number", "technician",
)


def _money(value):
    return str(value.quantize(Decimal("0.01"))) if value is not None else None


def _with_blocks(data, kind, document, blocks, can_edit):
    if blocks is not None:
        data["blocks"] = [normalize_block(block) for block in blocks]
    if can_edit is not None:
        data["can_edit"] = can_edit
    data["kind"] = kind
    return data


def normalize_report(report, blocks=None, can_edit=None):
    data = {"id": report.id}
    data.update({field: getattr(report, field) for field in REPORT_FIELDS})
    data["inspection_date"] = iso(report.inspection_date)
    data["submitted_at"] = iso(report.submitted_at)
    data["approved_at"] = iso(report.approved_at)
    data["created_at"] = iso(report.created_at)
    data["updated_at"] = iso(report.updated_at)
    return _with_blocks(data, "report", report, blocks, can_edit)


def normalize_invoice(invoice, blocks=None, can_edit=None):
    data = {"id": invoice.id}
    data.update({field: getattr(invoice, field) for field in INVOICE_FIELDS})
    data["date"] = iso(invoice.date)
    data["total"] = _money(invoice.total)
    data["gst"] = _money(invoice.gst)
    data["total_inc_gst"] = _money(invoice.total_inc_gst)
    data["submitted_at"] = iso(invoice.submitted_at)
    data["created_at"] = iso(invoice.created_at)
    data["updated_at"] = iso(invoice.updated_at)
    return _with_blocks(data, "invoice", invoice, blocks, can_edit)


def normalize_template(template, blocks=None, can_edit=None, kind="template"):
    data = {"id": template.id}
    data.update({field: getattr(template, field, None) for field in TEMPLATE_FIELDS})
    data["created_at"] = iso(template.created_at)
    data["updated_at"] = iso(template.updated_at)
    return _with_blocks(data, kind, template, blocks, can_edit)


def normalize_invoice_template(template, blocks=None, can_edit=None):
    return normalize_template(template, blocks, can_edit, kind="invoice_template")


NORMALIZERS = {
    "report": normalize_report,
    "invoice": normalize_invoice,
    "template": normalize_template,
    "invoice_template": normalize_invoice_template,
}


def normalize_document(kind, document, blocks=None, can_edit=None):
    return NORMALIZERS[kind.name](document, blocks=blocks, can_edit=can_edit)
