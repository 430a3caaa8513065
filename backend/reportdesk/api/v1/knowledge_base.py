from flask import jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.application.knowledge_base import documents, report_types
from reportdesk.domain.exceptions import ValidationError
from reportdesk.normalizers.knowledge_base import normalize_kb_document, normalize_report_type
from reportdesk.utils.decorators import active_user_required, admin_required
from . import v1_bp


# ------------------------
# Report types
# ------------------------

@v1_bp.route("/report-types", methods=["GET"])
@jwt_required()
@active_user_required
def list_report_types():
    return jsonify([normalize_report_type(rt) for rt in report_types.list_report_types()]), 200


@v1_bp.route("/report-types", methods=["POST"])
@jwt_required()
@admin_required
def create_report_type():
    data = request.get_json(silent=True) or {}
    report_type = report_types.create_report_type(data=data)
    return jsonify(normalize_report_type(report_type)), 201


@v1_bp.route("/report-types/<report_type_id>", methods=["PUT"])
@jwt_required()
@admin_required
def update_report_type(report_type_id):
    data = request.get_json(silent=True) or {}
    report_type = report_types.update_report_type(report_type_id=report_type_id, data=data)
    return jsonify(normalize_report_type(report_type)), 200


@v1_bp.route("/report-types/<report_type_id>", methods=["DELETE"])
@jwt_required()
@admin_required
def delete_report_type(report_type_id):
    report_types.delete_report_type(report_type_id=report_type_id)
    return jsonify({"message": "Report type deleted"}), 200


# ------------------------
# Knowledge base documents
# ------------------------

@v1_bp.route("/knowledge-base/documents", methods=["GET"])
@jwt_required()
@admin_required
def list_kb_documents():
    items = documents.list_documents(report_type_id=request.args.get("report_type_id"))
    return jsonify([normalize_kb_document(document) for document in items]), 200


@v1_bp.route("/knowledge-base/documents", methods=["POST"])
@jwt_required()
@admin_required
def upload_kb_document():
    file = request.files.get("file")
    report_type_id = request.form.get("report_type_id")
    if file is None or not report_type_id:
        raise ValidationError("Please select a report type and file")

    document = documents.upload_document(report_type_id=report_type_id, file=file)
    return jsonify(normalize_kb_document(document, include_content=True)), 201


@v1_bp.route("/knowledge-base/documents/<document_id>", methods=["DELETE"])
@jwt_required()
@admin_required
def delete_kb_document(document_id):
    documents.delete_document(document_id=document_id)
    return jsonify({"message": "Document deleted"}), 200
