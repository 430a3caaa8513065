from flask import current_app, g
from reportdesk.extensions import db
from reportdesk.models.audit_log import AuditLog
from typing import Optional

def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None
):
    auth = getattr(g, "auth", None)
    session = auth.snapshot() if auth else None

    log = AuditLog()
    log.actor_id = session.user_id if session else None
    log.action = action
    log.entity_type = entity_type
    log.entity_id = entity_id or "*"
    log.payload = payload or {}

    db.session.add(log)

    current_app.logger.info(
        "%s %s=%s by %s", action, entity_type, entity_id, log.actor_id or "system"
    )
