from reportdesk.extensions import db
from reportdesk.domain.lifecycle.invoice import INVOICE_DRAFT
from .base import BaseModel


class Invoice(BaseModel):
    __tablename__ = "invoices"

    user_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    invoice_number = db.Column(db.String(100), nullable=True)
    date = db.Column(db.Date, nullable=True)
    status = db.Column(db.String(20), nullable=False, default=INVOICE_DRAFT, index=True)

    customer_name = db.Column(db.String(255), nullable=True)
    customer_company = db.Column(db.String(255), nullable=True)
    customer_email = db.Column(db.String(255), nullable=True)
    customer_phone = db.Column(db.String(50), nullable=True)
    purchase_order = db.Column(db.String(100), nullable=True)

    total = db.Column(db.Numeric(12, 2), nullable=True)
    gst = db.Column(db.Numeric(12, 2), nullable=True)
    total_inc_gst = db.Column(db.Numeric(12, 2), nullable=True)

    submitted_at = db.Column(db.DateTime(timezone=True), nullable=True)
