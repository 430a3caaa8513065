from flask import current_app, jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.application.documents.clone_document import clone_document
from reportdesk.application.documents.delete_document import delete_document
from reportdesk.application.documents.kinds import REPORT
from reportdesk.application.documents.save_document import save_document
from reportdesk.application.reports.ai_assist import generate_report_text, review_report
from reportdesk.application.reports.company_reports import company_folders
from reportdesk.application.reports.create_report import create_report
from reportdesk.application.reports.review_decision import approve_report, reject_report
from reportdesk.application.reports.submit_report import submit_report
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import ValidationError
from reportdesk.domain.lifecycle.report import REPORT_COMPLETED, REPORT_STATUSES
from reportdesk.models.report import Report
from reportdesk.normalizers.document import normalize_report
from reportdesk.normalizers.pagination import normalize_pagination
from reportdesk.utils.decorators import active_user_required, admin_required
from reportdesk.utils.pagination import paginate_cursor, parse_limit
from ._documents import document_response, owner_scoped
from . import v1_bp


# ------------------------
# Collection
# ------------------------

@v1_bp.route("/reports", methods=["GET"])
@jwt_required()
@active_user_required
def list_reports():
    query = owner_scoped(REPORT, Report.query)

    if status := request.args.get("status"):
        if status not in REPORT_STATUSES:
            raise ValidationError(f"Unknown report status: {status}")
        query = query.filter(Report.status == status)

    if request.args.get("pending") == "true":
        query = query.filter(Report.submitted_for_approval.is_(True), Report.status != REPORT_COMPLETED)

    items, cursor = paginate_cursor(
        query,
        model=Report,
        limit=parse_limit(request.args.get("limit"), current_app.config["DEFAULT_PER_PAGE"]),
        cursor=request.args.get("cursor"),
    )
    return jsonify(normalize_pagination(items, normalize_report, cursor=cursor)), 200


@v1_bp.route("/reports", methods=["POST"])
@jwt_required()
@active_user_required
def create_report_route():
    data = request.get_json(silent=True) or {}
    report = create_report(data=data)
    return document_response(REPORT, report, status=201)


@v1_bp.route("/reports/company", methods=["GET"])
@jwt_required()
@active_user_required
def list_company_reports():
    folders = company_folders(search=request.args.get("search"))

    return jsonify([
        {
            "client_name": folder["client_name"],
            "count": folder["count"],
            "reports": [normalize_report(report) for report in folder["reports"]],
        }
        for folder in folders
    ]), 200


@v1_bp.route("/reports/generate", methods=["POST"])
@jwt_required()
@active_user_required
def generate_report():
    data = request.get_json(silent=True) or {}
    content = generate_report_text(
        report_type_id=data.get("report_type_id") or data.get("reportTypeId"),
        user_inputs=data.get("user_inputs", data.get("userInputs", {})),
    )
    return jsonify({"content": content}), 200


# ------------------------
# Single report
# ------------------------

@v1_bp.route("/reports/<report_id>", methods=["GET"])
@jwt_required()
def get_report(report_id):
    report = REPORT.load_for(report_id, current_actor())
    return document_response(REPORT, report)


@v1_bp.route("/reports/<report_id>", methods=["PUT"])
@jwt_required()
def update_report(report_id):
    data = request.get_json(silent=True) or {}
    report, failed_blocks = save_document(kind=REPORT, document_id=report_id, data=data)
    return document_response(REPORT, report, failed_blocks=failed_blocks)


@v1_bp.route("/reports/<report_id>", methods=["DELETE"])
@jwt_required()
def delete_report(report_id):
    delete_document(kind=REPORT, document_id=report_id)
    return jsonify({"message": "Report deleted"}), 200


@v1_bp.route("/reports/<report_id>/submit", methods=["POST"])
@jwt_required()
def submit_report_route(report_id):
    report = submit_report(report_id=report_id)
    return document_response(REPORT, report)


@v1_bp.route("/reports/<report_id>/approve", methods=["POST"])
@jwt_required()
@admin_required
def approve_report_route(report_id):
    report = approve_report(report_id=report_id)
    return document_response(REPORT, report)


@v1_bp.route("/reports/<report_id>/reject", methods=["POST"])
@jwt_required()
@admin_required
def reject_report_route(report_id):
    data = request.get_json(silent=True) or {}
    report = reject_report(report_id=report_id, reason=data.get("reason"))
    return document_response(REPORT, report)


@v1_bp.route("/reports/<report_id>/clone", methods=["POST"])
@jwt_required()
@active_user_required
def clone_report(report_id):
    report = clone_document(kind=REPORT, source_id=report_id)
    return document_response(REPORT, report, status=201)


@v1_bp.route("/reports/<report_id>/review", methods=["POST"])
@jwt_required()
@active_user_required
def review_report_route(report_id):
    return jsonify({"review": review_report(report_id=report_id)}), 200
