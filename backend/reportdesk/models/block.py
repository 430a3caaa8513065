from sqlalchemy.orm import declared_attr
from reportdesk.extensions import db
from .base import BaseModel


def _block_table_args(table_name):
    return (
        db.UniqueConstraint("owner_id", "order_index", name=f"uq_{table_name}_order"),
        db.Index(f"idx_{table_name}_owner_order", "owner_id", "order_index"),
    )


class BlockMixin:
    """
    Columns shared by every block collection.

    Subclasses set ``__owner_table__``; ``owner_id`` points at it.
    """
    __owner_table__: str

    type = db.Column(db.String(50), nullable=False)  # heading, text, checklist, ...
    order_index = db.Column(db.Integer, nullable=False, default=0)
    content = db.Column(db.JSON, nullable=False, default=dict)

    @declared_attr
    def owner_id(cls):
        return db.Column(
            db.String(36),
            db.ForeignKey(f"{cls.__owner_table__}.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class ReportBlock(BaseModel, BlockMixin):
    __tablename__ = "report_blocks"
    __owner_table__ = "reports"
    __table_args__ = _block_table_args(__tablename__)


class InvoiceBlock(BaseModel, BlockMixin):
    __tablename__ = "invoice_blocks"
    __owner_table__ = "invoices"
    __table_args__ = _block_table_args(__tablename__)


class TemplateBlock(BaseModel, BlockMixin):
    __tablename__ = "template_blocks"
    __owner_table__ = "report_templates"
    __table_args__ = _block_table_args(__tablename__)


class InvoiceTemplateBlock(BaseModel, BlockMixin):
    __tablename__ = "invoice_template_blocks"
    __owner_table__ = "invoice_templates"
    __table_args__ = _block_table_args(__tablename__)
