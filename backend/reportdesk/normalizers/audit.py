from typing import Any, Dict

from reportdesk.models.audit_log import AuditLog
from ._dates import iso


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    """Audit rows are append-only; ``actor_id`` is None for system actions."""
    return {
        "id": log.id,
        "actor_id": log.actor_id,
        "action": log.action,
        "entity_type": log.entity_type,
        "entity_id": log.entity_id,
        "payload": log.payload or {},
        "created_at": iso(log.created_at),
    }
