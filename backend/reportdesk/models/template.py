from reportdesk.extensions import db
from reportdesk.domain.lifecycle.template import TEMPLATE_DRAFT
from .base import BaseModel


class ReportTemplate(BaseModel):
    __tablename__ = "report_templates"

    title = db.Column(db.String(255), nullable=False, default="New Template")
    description = db.Column(db.Text, nullable=True)
    category = db.Column(db.String(100), nullable=True)

    # Header defaults copied into reports started from this template
    job_number = db.Column(db.String(100), nullable=True)
    report_number = db.Column(db.String(100), nullable=True)
    location = db.Column(db.String(255), nullable=True)
    subject = db.Column(db.String(255), nullable=True)
    order_number = db.Column(db.String(100), nullable=True)
    technician = db.Column(db.String(255), nullable=True)

    status = db.Column(db.String(20), nullable=False, default=TEMPLATE_DRAFT, index=True)
    created_by = db.Column(db.String(36), nullable=True)


class InvoiceTemplate(BaseModel):
    """The single set of default blocks every new invoice starts from."""
    __tablename__ = "invoice_templates"

    title = db.Column(db.String(255), nullable=False, default="Default Invoice")
    status = db.Column(db.String(20), nullable=False, default=TEMPLATE_DRAFT)
    created_by = db.Column(db.String(36), nullable=True)
