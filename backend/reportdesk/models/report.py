from reportdesk.extensions import db
from reportdesk.domain.lifecycle.report import REPORT_DRAFT
from .base import BaseModel


class Report(BaseModel):
    __tablename__ = "reports"

    user_id = db.Column(db.String(36), db.ForeignKey("profiles.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False, default="Untitled Report")
    status = db.Column(db.String(20), nullable=False, default=REPORT_DRAFT, index=True)
    submitted_for_approval = db.Column(db.Boolean, nullable=False, default=False)

    client_name = db.Column(db.String(255), nullable=True, index=True)
    client_email = db.Column(db.String(255), nullable=True)
    job_number = db.Column(db.String(100), nullable=True)
    report_number = db.Column(db.String(100), nullable=True)
    location = db.Column(db.String(255), nullable=True)
    subject = db.Column(db.String(255), nullable=True)
    order_number = db.Column(db.String(100), nullable=True)
    technician = db.Column(db.String(255), nullable=True)
    inspection_date = db.Column(db.Date, nullable=True)

    report_type_id = db.Column(db.String(36), db.ForeignKey("report_types.id", ondelete="SET NULL"), nullable=True)
    template_id = db.Column(db.String(36), db.ForeignKey("report_templates.id", ondelete="SET NULL"), nullable=True)

    submitted_at = db.Column(db.DateTime(timezone=True), nullable=True)
    approved_by = db.Column(db.String(36), nullable=True)
    approved_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)
