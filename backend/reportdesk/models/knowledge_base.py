from reportdesk.extensions import db
from .base import BaseModel


class ReportType(BaseModel):
    __tablename__ = "report_types"

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_by = db.Column(db.String(36), nullable=True)

    documents = db.relationship(
        "KnowledgeBaseDocument",
        back_populates="report_type",
        cascade="all, delete-orphan",
    )


class KnowledgeBaseDocument(BaseModel):
    __tablename__ = "knowledge_base_documents"

    report_type_id = db.Column(
        db.String(36),
        db.ForeignKey("report_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    file_name = db.Column(db.String(255), nullable=False)
    file_path = db.Column(db.String(512), nullable=False)
    file_type = db.Column(db.String(20), nullable=False, default="unknown")
    content = db.Column(db.Text, nullable=True)
    created_by = db.Column(db.String(36), nullable=True)

    report_type = db.relationship("ReportType", back_populates="documents")


class PlatformSetting(BaseModel):
    __tablename__ = "platform_settings"

    key = db.Column(db.String(100), unique=True, nullable=False)
    value = db.Column(db.JSON, nullable=False, default=dict)
    updated_by = db.Column(db.String(36), nullable=True)
