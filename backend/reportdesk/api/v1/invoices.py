from flask import current_app, jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.application.documents.clone_document import clone_document
from reportdesk.application.documents.delete_document import delete_document
from reportdesk.application.documents.kinds import INVOICE, INVOICE_TEMPLATE
from reportdesk.application.documents.save_document import save_document
from reportdesk.application.invoices.create_invoice import create_invoice
from reportdesk.application.invoices.submit_invoice import submit_invoice
from reportdesk.application.templates.invoice_template import get_invoice_template
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import ValidationError
from reportdesk.domain.lifecycle.invoice import INVOICE_DRAFT, INVOICE_SUBMITTED
from reportdesk.models.invoice import Invoice
from reportdesk.normalizers.document import normalize_invoice
from reportdesk.normalizers.pagination import normalize_pagination
from reportdesk.utils.decorators import active_user_required, admin_required
from reportdesk.utils.pagination import paginate_cursor, parse_limit
from ._documents import document_response, owner_scoped
from . import v1_bp


@v1_bp.route("/invoices", methods=["GET"])
@jwt_required()
@active_user_required
def list_invoices():
    query = owner_scoped(INVOICE, Invoice.query)

    if status := request.args.get("status"):
        if status not in (INVOICE_DRAFT, INVOICE_SUBMITTED):
            raise ValidationError(f"Unknown invoice status: {status}")
        query = query.filter(Invoice.status == status)

    items, cursor = paginate_cursor(
        query,
        model=Invoice,
        limit=parse_limit(request.args.get("limit"), current_app.config["DEFAULT_PER_PAGE"]),
        cursor=request.args.get("cursor"),
    )
    return jsonify(normalize_pagination(items, normalize_invoice, cursor=cursor)), 200


@v1_bp.route("/invoices", methods=["POST"])
@jwt_required()
@active_user_required
def create_invoice_route():
    data = request.get_json(silent=True) or {}
    invoice = create_invoice(data=data)
    return document_response(INVOICE, invoice, status=201)


# ------------------------
# Default invoice content
# ------------------------

@v1_bp.route("/invoices/template", methods=["GET"])
@jwt_required()
@admin_required
def get_invoice_template_route():
    return document_response(INVOICE_TEMPLATE, get_invoice_template())


@v1_bp.route("/invoices/template", methods=["PUT"])
@jwt_required()
@admin_required
def update_invoice_template():
    data = request.get_json(silent=True) or {}
    template, failed_blocks = save_document(
        kind=INVOICE_TEMPLATE,
        document_id=get_invoice_template().id,
        data=data,
    )
    return document_response(INVOICE_TEMPLATE, template, failed_blocks=failed_blocks)


# ------------------------
# Single invoice
# ------------------------

@v1_bp.route("/invoices/<invoice_id>", methods=["GET"])
@jwt_required()
def get_invoice(invoice_id):
    invoice = INVOICE.load_for(invoice_id, current_actor())
    return document_response(INVOICE, invoice)


@v1_bp.route("/invoices/<invoice_id>", methods=["PUT"])
@jwt_required()
def update_invoice(invoice_id):
    data = request.get_json(silent=True) or {}
    invoice, failed_blocks = save_document(kind=INVOICE, document_id=invoice_id, data=data)
    return document_response(INVOICE, invoice, failed_blocks=failed_blocks)


@v1_bp.route("/invoices/<invoice_id>", methods=["DELETE"])
@jwt_required()
def delete_invoice(invoice_id):
    delete_document(kind=INVOICE, document_id=invoice_id)
    return jsonify({"message": "Invoice deleted"}), 200


@v1_bp.route("/invoices/<invoice_id>/submit", methods=["POST"])
@jwt_required()
def submit_invoice_route(invoice_id):
    invoice = submit_invoice(invoice_id=invoice_id)
    return document_response(INVOICE, invoice)


@v1_bp.route("/invoices/<invoice_id>/clone", methods=["POST"])
@jwt_required()
@active_user_required
def clone_invoice(invoice_id):
    invoice = clone_document(kind=INVOICE, source_id=invoice_id)
    return document_response(INVOICE, invoice, status=201)
