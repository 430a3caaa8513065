from reportdesk.domain.blocks import normalize_content, render_capability
from ._dates import iso


def normalize_block(block, admin=False):
    """Works for ORM blocks and ``BlockState`` snapshots alike."""
    content = normalize_content(block.type, block.content)

    base = {
        "id": block.id,
        "type": block.type,
        "order_index": block.order_index,
        "content": content,
        "render": render_capability(block.type, content),
    }

    if admin and hasattr(block, "created_at"):
        base["created_at"] = iso(block.created_at)
        base["updated_at"] = iso(block.updated_at)

    return base
