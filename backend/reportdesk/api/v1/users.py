from flask import jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.application.users.accounts import register_profile
from reportdesk.application.users.roles import list_users, set_user_role
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied, ValidationError
from reportdesk.domain.roles import Role, can_manage_role
from reportdesk.normalizers.user import normalize_user
from reportdesk.utils.decorators import admin_required
from . import v1_bp


@v1_bp.route("/users", methods=["GET"])
@jwt_required()
@admin_required
def get_users():
    return jsonify([normalize_user(profile, role) for profile, role in list_users()]), 200


@v1_bp.route("/users", methods=["POST"])
@jwt_required()
@admin_required
def create_user():
    data = request.get_json(silent=True) or {}

    role = Role.from_value(data.get("role", Role.STAFF.value))
    if data.get("role") not in (None, role.value):
        raise ValidationError(f"Unknown role: {data.get('role')}")
    if not can_manage_role(current_actor().role, role):
        raise PermissionDenied("You do not have permission to grant this role")

    profile = register_profile(data=data, role=role)
    return jsonify(normalize_user(profile, role)), 201


@v1_bp.route("/users/<user_id>/role", methods=["PUT"])
@jwt_required()
@admin_required
def update_user_role(user_id):
    data = request.get_json(silent=True) or {}
    role = set_user_role(user_id=user_id, role=data.get("role"))

    return jsonify({"id": user_id, "role": role.value}), 200
