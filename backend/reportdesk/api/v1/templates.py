from flask import jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.application.documents.clone_document import clone_document, instantiate_from_template
from reportdesk.application.documents.delete_document import delete_document
from reportdesk.application.documents.kinds import REPORT, TEMPLATE
from reportdesk.application.documents.save_document import parse_metadata, save_document
from reportdesk.application.templates.create_template import create_template, list_templates
from reportdesk.application.templates.default_template import create_default_template
from reportdesk.application.templates.publish_template import set_template_status
from reportdesk.auth_context import current_actor
from reportdesk.normalizers.document import normalize_template
from reportdesk.utils.decorators import active_user_required, admin_required
from ._documents import document_response
from . import v1_bp


@v1_bp.route("/templates", methods=["GET"])
@jwt_required()
@active_user_required
def get_templates():
    return jsonify([normalize_template(template) for template in list_templates()]), 200


@v1_bp.route("/templates", methods=["POST"])
@jwt_required()
@admin_required
def create_template_route():
    data = request.get_json(silent=True) or {}
    template = create_template(data=data)
    return document_response(TEMPLATE, template, status=201)


@v1_bp.route("/templates/default", methods=["POST"])
@jwt_required()
@admin_required
def create_default_template_route():
    template = create_default_template()
    return document_response(TEMPLATE, template, status=201)


@v1_bp.route("/templates/<template_id>", methods=["GET"])
@jwt_required()
def get_template(template_id):
    template = TEMPLATE.load_for(template_id, current_actor())
    return document_response(TEMPLATE, template)


@v1_bp.route("/templates/<template_id>", methods=["PUT"])
@jwt_required()
@admin_required
def update_template(template_id):
    data = request.get_json(silent=True) or {}
    template, failed_blocks = save_document(kind=TEMPLATE, document_id=template_id, data=data)
    return document_response(TEMPLATE, template, failed_blocks=failed_blocks)


@v1_bp.route("/templates/<template_id>", methods=["DELETE"])
@jwt_required()
@admin_required
def delete_template(template_id):
    delete_document(kind=TEMPLATE, document_id=template_id)
    return jsonify({"message": "Template deleted"}), 200


@v1_bp.route("/templates/<template_id>/publish", methods=["POST"])
@jwt_required()
@admin_required
def publish_template(template_id):
    template = set_template_status(template_id=template_id, publish=True)
    return document_response(TEMPLATE, template)


@v1_bp.route("/templates/<template_id>/unpublish", methods=["POST"])
@jwt_required()
@admin_required
def unpublish_template(template_id):
    template = set_template_status(template_id=template_id, publish=False)
    return document_response(TEMPLATE, template)


@v1_bp.route("/templates/<template_id>/clone", methods=["POST"])
@jwt_required()
@admin_required
def clone_template(template_id):
    template = clone_document(kind=TEMPLATE, source_id=template_id)
    return document_response(TEMPLATE, template, status=201)


@v1_bp.route("/templates/<template_id>/instantiate", methods=["POST"])
@jwt_required()
@active_user_required
def instantiate_template(template_id):
    """Start a new draft report from this template."""
    data = request.get_json(silent=True) or {}
    report = instantiate_from_template(
        template_kind=TEMPLATE,
        template_id=template_id,
        target_kind=REPORT,
        overrides=parse_metadata(REPORT, data),
    )
    return document_response(REPORT, report, status=201)
