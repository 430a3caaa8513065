"""
Document kinds.

Reports, invoices, report templates and the invoice template share one
container shape: metadata on a row plus an ordered block collection. What
differs per kind (fields, block types, edit guard, what a clone resets) is
declared here once.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from reportdesk.application.blocks.store import BlockStore
from reportdesk.auth_context import Session
from reportdesk.domain.blocks import INVOICE_BLOCK_TYPES, REPORT_BLOCK_TYPES, BlockType
from reportdesk.domain.exceptions import NotFoundError, PermissionDenied
from reportdesk.domain.lifecycle.invoice import INVOICE_DRAFT
from reportdesk.domain.lifecycle.report import REPORT_COMPLETED, REPORT_DRAFT
from reportdesk.domain.lifecycle.template import TEMPLATE_DRAFT, TEMPLATE_PUBLISHED
from reportdesk.domain.permissions import can_edit_invoice, can_edit_report, can_edit_template
from reportdesk.domain.roles import Role
from reportdesk.extensions import db
from reportdesk.models.block import InvoiceBlock, InvoiceTemplateBlock, ReportBlock, TemplateBlock
from reportdesk.models.invoice import Invoice
from reportdesk.models.report import Report
from reportdesk.models.template import InvoiceTemplate, ReportTemplate
from reportdesk.utils.fields import parse_date, parse_decimal, parse_text


# Report header fields a template can preset
TEMPLATE_HEADER_FIELDS = ("job_number", "report_number", "location", "subject", "order_number", "technician")


@dataclass(frozen=True)
class DocumentKind:
    name: str
    label: str
    model: Any
    store: BlockStore
    block_types: FrozenSet[BlockType]
    # field name -> parser(value, field_name)
    fields: Dict[str, Callable[[Any, str], Any]]
    initial_status: str
    can_edit: Callable[[Any, Role], bool]
    # metadata a clone carries over; everything else starts empty
    cloned_fields: Tuple[str, ...] = ()
    owner_field: Optional[str] = None
    required_fields: Tuple[str, ...] = field(default_factory=tuple)
    # statuses any active user may read
    public_statuses: FrozenSet[str] = frozenset()

    def load(self, document_id):
        document = db.session.get(self.model, document_id) if document_id else None
        if document is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return document

    def can_view(self, document, actor: Session) -> bool:
        if not actor.role.is_active:
            return False
        if actor.is_admin:
            return True
        if getattr(document, "status", None) in self.public_statuses:
            return True
        if self.owner_field:
            return getattr(document, self.owner_field) == actor.user_id
        # Staff only see templates that have been published
        return getattr(document, "status", TEMPLATE_PUBLISHED) == TEMPLATE_PUBLISHED

    def load_for(self, document_id, actor: Session):
        document = self.load(document_id)
        if not self.can_view(document, actor):
            # Hide other users' documents entirely
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return document

    def assert_can_edit(self, document, actor: Session) -> None:
        if not self.can_edit(document, actor.role):
            raise PermissionDenied(
                f"You cannot edit this {self.label} in its current state"
            )


REPORT = DocumentKind(
    name="report",
    label="report",
    model=Report,
    store=BlockStore(ReportBlock, Report),
    block_types=REPORT_BLOCK_TYPES,
    fields={
        "title": parse_text,
        "client_name": parse_text,
        "client_email": parse_text,
        "job_number": parse_text,
        "report_number": parse_text,
        "location": parse_text,
        "subject": parse_text,
        "order_number": parse_text,
        "technician": parse_text,
        "inspection_date": parse_date,
        "report_type_id": parse_text,
    },
    required_fields=("title",),
    initial_status=REPORT_DRAFT,
    can_edit=can_edit_report,
    cloned_fields=(
        "title", "client_name", "client_email", "job_number", "location",
        "subject", "order_number", "technician", "report_type_id", "template_id",
    ),
    owner_field="user_id",
    public_statuses=frozenset({REPORT_COMPLETED}),
)

INVOICE = DocumentKind(
    name="invoice",
    label="invoice",
    model=Invoice,
    store=BlockStore(InvoiceBlock, Invoice),
    block_types=INVOICE_BLOCK_TYPES,
    fields={
        "invoice_number": parse_text,
        "date": parse_date,
        "customer_name": parse_text,
        "customer_company": parse_text,
        "customer_email": parse_text,
        "customer_phone": parse_text,
        "purchase_order": parse_text,
        "total": parse_decimal,
        "gst": parse_decimal,
        "total_inc_gst": parse_decimal,
    },
    initial_status=INVOICE_DRAFT,
    can_edit=can_edit_invoice,
    cloned_fields=("customer_name", "customer_company", "customer_email", "customer_phone", "purchase_order"),
    owner_field="user_id",
)

TEMPLATE = DocumentKind(
    name="template",
    label="template",
    model=ReportTemplate,
    store=BlockStore(TemplateBlock, ReportTemplate),
    block_types=REPORT_BLOCK_TYPES,
    fields={
        "title": parse_text,
        "description": parse_text,
        "category": parse_text,
        **{field: parse_text for field in TEMPLATE_HEADER_FIELDS},
    },
    required_fields=("title",),
    initial_status=TEMPLATE_DRAFT,
    can_edit=can_edit_template,
    cloned_fields=("title", "description", "category") + TEMPLATE_HEADER_FIELDS,
)

INVOICE_TEMPLATE = DocumentKind(
    name="invoice_template",
    label="invoice template",
    model=InvoiceTemplate,
    store=BlockStore(InvoiceTemplateBlock, InvoiceTemplate),
    block_types=INVOICE_BLOCK_TYPES,
    fields={"title": parse_text},
    required_fields=("title",),
    initial_status=TEMPLATE_DRAFT,
    can_edit=can_edit_template,
)

KINDS = {kind.name: kind for kind in (REPORT, INVOICE, TEMPLATE, INVOICE_TEMPLATE)}
