from flask import jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.application.knowledge_base.settings import get_setting, list_openai_models, put_setting
from reportdesk.domain.roles import Role
from reportdesk.normalizers.knowledge_base import normalize_setting
from reportdesk.utils.decorators import roles_required
from . import v1_bp


@v1_bp.route("/super-admin/settings/<key>", methods=["GET"])
@jwt_required()
@roles_required(Role.SUPER_ADMIN)
def read_setting(key):
    return jsonify(normalize_setting(get_setting(key))), 200


@v1_bp.route("/super-admin/settings/<key>", methods=["PUT"])
@jwt_required()
@roles_required(Role.SUPER_ADMIN)
def write_setting(key):
    data = request.get_json(silent=True) or {}
    setting = put_setting(key=key, value=data.get("value"))
    return jsonify(normalize_setting(setting)), 200


@v1_bp.route("/super-admin/openai-models", methods=["POST"])
@jwt_required()
@roles_required(Role.SUPER_ADMIN)
def openai_models():
    data = request.get_json(silent=True) or {}
    models = list_openai_models(api_key=data.get("api_key") or data.get("apiKey"))
    return jsonify({"models": models}), 200
