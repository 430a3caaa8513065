from reportdesk.application.documents.kinds import TEMPLATE_HEADER_FIELDS
from reportdesk.auth_context import current_actor
from reportdesk.domain.exceptions import PermissionDenied
from reportdesk.extensions import db
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def _new_document(kind, actor, values):
    document = kind.model()
    for field, value in values.items():
        setattr(document, field, value)

    document.status = kind.initial_status
    if kind.owner_field:
        setattr(document, kind.owner_field, actor.user_id)
    elif hasattr(document, "created_by"):
        document.created_by = actor.user_id

    db.session.add(document)
    db.session.flush()  # ensures document.id
    return document


def copy_document(*, source_kind, source, target_kind, actor, overrides=None, action):
    """
    Create a new ``target_kind`` document from ``source`` and deep-copy its
    blocks. Row and blocks are written in one transaction.
    """
    values = {
        field: getattr(source, field)
        for field in target_kind.cloned_fields
        if hasattr(source, field)
    }
    values.update(overrides or {})

    source_blocks = source_kind.store.list(source.id)

    with transactional():
        document = _new_document(target_kind, actor, values)
        target_kind.store.copy_into(source_blocks, document.id)

        log_action(
            action=action,
            entity_type=target_kind.name,
            entity_id=document.id,
            payload={
                "source_type": source_kind.name,
                "source_id": source.id,
                "blocks": len(source_blocks),
            },
        )

    return document


def clone_document(*, kind, source_id):
    """
    Clone a document in its initial draft state.

    Numbers, dates, status and approval stamps are not carried over; only
    ``kind.cloned_fields`` are.
    """
    actor = current_actor()
    source = kind.load_for(source_id, actor)

    if not actor.role.is_active or (kind.owner_field is None and not actor.is_admin):
        raise PermissionDenied(f"You cannot clone this {kind.label}")

    return copy_document(
        source_kind=kind,
        source=source,
        target_kind=kind,
        actor=actor,
        action=f"{kind.name}.clone",
    )


def instantiate_from_template(*, template_kind, template_id, target_kind, overrides=None):
    """
    Start a new document from a template's blocks and header fields.
    The template is only read; header fields it leaves unset start empty.
    """
    actor = current_actor()
    if not actor.role.is_active:
        raise PermissionDenied("Your account is inactive")

    template = template_kind.load_for(template_id, actor)

    values = {"template_id": template.id} if hasattr(target_kind.model, "template_id") else {}
    if hasattr(target_kind.model, "title") and getattr(template, "title", None):
        values["title"] = template.title
    for field in TEMPLATE_HEADER_FIELDS:
        if hasattr(target_kind.model, field):
            values[field] = getattr(template, field, None)
    values.update(overrides or {})

    return copy_document(
        source_kind=template_kind,
        source=template,
        target_kind=target_kind,
        actor=actor,
        overrides=values,
        action=f"{target_kind.name}.instantiate",
    )
