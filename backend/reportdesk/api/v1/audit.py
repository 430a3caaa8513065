from flask import current_app, jsonify, request
from flask_jwt_extended import jwt_required

from reportdesk.models.audit_log import AuditLog
from reportdesk.normalizers.audit import normalize_audit_log
from reportdesk.normalizers.pagination import normalize_pagination
from reportdesk.utils.decorators import admin_required
from reportdesk.utils.pagination import paginate_cursor, parse_limit
from . import v1_bp


@v1_bp.route("/audit-logs", methods=["GET"])
@jwt_required()
@admin_required
def list_audit_logs():
    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, cursor = paginate_cursor(
        query,
        model=AuditLog,
        limit=parse_limit(request.args.get("limit"), current_app.config["DEFAULT_PER_PAGE"]),
        cursor=request.args.get("cursor"),
    )
    return jsonify(normalize_pagination(logs, normalize_audit_log, cursor=cursor)), 200
