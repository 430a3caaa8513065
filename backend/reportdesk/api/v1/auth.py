from flask import g, jsonify, request
from flask_jwt_extended import create_access_token

from reportdesk.application.users.accounts import authenticate, register_profile
from reportdesk.models.user import load_role
from reportdesk.normalizers.user import normalize_session
from . import v1_bp


@v1_bp.route("/auth/signup", methods=["POST"])
def signup():
    """New accounts have no role until an administrator assigns one."""
    data = request.get_json(silent=True) or {}
    profile = register_profile(data=data)

    return jsonify({
        "id": profile.id,
        "email": profile.email,
        "role": load_role(profile.id).value,
        "message": "Account created. An administrator must activate it before you can sign in to work.",
    }), 201


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or {}
    profile = authenticate(data=data)
    role = load_role(profile.id)

    return jsonify({
        "access_token": create_access_token(identity=profile.id),
        "user": {"id": profile.id, "email": profile.email, "role": role.value},
    }), 200


@v1_bp.route("/auth/session", methods=["GET"])
def session():
    return jsonify(normalize_session(g.auth.refresh())), 200
