from reportdesk.application.blocks.photos import photo_paths
from reportdesk.auth_context import current_actor
from reportdesk.extensions import db
from reportdesk.utils import media
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


def delete_document(*, kind, document_id) -> None:
    """
    Hard-delete a document and its blocks.

    Notes:
    - Blocks → document (bottom-up)
    - Uploaded photos are removed after the rows are gone
    """
    actor = current_actor()
    document = kind.load_for(document_id, actor)
    kind.assert_can_edit(document, actor)

    media_to_cleanup = photo_paths(kind.store.list(document.id))

    with transactional():
        deleted_blocks = kind.store.delete_all(document.id)
        db.session.delete(document)

        log_action(
            action=f"{kind.name}.delete",
            entity_type=kind.name,
            entity_id=document_id,
            payload={"blocks": deleted_blocks},
        )

    # Cleanup media outside transaction
    media.remove(media.PHOTOS_BUCKET, media_to_cleanup)
