"""Response helpers shared by the report, invoice and template routes."""
from flask import jsonify

from reportdesk.auth_context import current_actor
from reportdesk.normalizers.document import normalize_document


def document_response(kind, document, status=200, **extra):
    actor = current_actor()
    body = normalize_document(
        kind,
        document,
        blocks=kind.store.list(document.id),
        can_edit=kind.can_edit(document, actor.role),
    )
    body.update(extra)
    return jsonify(body), status


def owner_scoped(kind, query):
    """Admins list everything; everyone else only their own documents."""
    actor = current_actor()
    if actor.is_admin:
        return query
    return query.filter(getattr(kind.model, kind.owner_field) == actor.user_id)
