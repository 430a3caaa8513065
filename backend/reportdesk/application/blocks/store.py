import copy
from typing import Any, Iterable, List, Sequence

from reportdesk.extensions import db
from reportdesk.domain.exceptions import NotFoundError, ValidationError
from reportdesk.utils.order import apply_order, compact_order


class BlockStore:
    """
    CRUD for one block collection, always scoped to an owning document.

    Nothing here commits: callers wrap a use case in ``transactional()``.
    """

    def __init__(self, block_model, owner_model):
        self.block_model = block_model
        self.owner_model = owner_model

    @property
    def table(self) -> str:
        return self.block_model.__tablename__

    # ------------------------
    # Queries
    # ------------------------
    def _scoped(self, owner_id):
        return self.block_model.query.filter_by(owner_id=owner_id)

    def list(self, owner_id) -> List[Any]:
        model = self.block_model
        return (
            self._scoped(owner_id)
            .order_by(model.order_index.asc(), model.created_at.asc(), model.id.asc())
            .all()
        )

    def get(self, block_id, owner_id=None):
        block = db.session.get(self.block_model, block_id)
        if block is None or (owner_id is not None and block.owner_id != owner_id):
            raise NotFoundError("Block not found. It may have been deleted.")
        return block

    def next_order_index(self, owner_id) -> int:
        max_order = (
            db.session.query(db.func.max(self.block_model.order_index))
            .filter(self.block_model.owner_id == owner_id)
            .scalar()
        )
        return 0 if max_order is None else max_order + 1

    # ------------------------
    # Writes
    # ------------------------
    def create(self, owner_id, block_type, content, order_index, block_id=None):
        if not owner_id or db.session.get(self.owner_model, owner_id) is None:
            raise ValidationError("Blocks must belong to an existing document")

        if not isinstance(order_index, int) or order_index < 0:
            raise ValidationError("order_index must be a non-negative integer")

        block = self.block_model()
        if block_id:
            block.id = block_id
        block.owner_id = owner_id
        block.type = block_type
        block.content = content if content is not None else {}
        block.order_index = order_index

        db.session.add(block)
        db.session.flush()
        return block

    def update(self, block_id, content, owner_id=None):
        block = self.get(block_id, owner_id)
        block.content = content
        db.session.flush()
        return block

    def update_order(self, block_id, order_index, owner_id=None):
        if not isinstance(order_index, int) or order_index < 0:
            raise ValidationError("order_index must be a non-negative integer")

        block = self.get(block_id, owner_id)
        block.order_index = order_index
        db.session.flush()
        return block

    def delete(self, block_id, owner_id=None):
        """Removes one block. Callers follow up with ``compact``."""
        block = self.get(block_id, owner_id)
        db.session.delete(block)
        db.session.flush()
        return block

    def delete_all(self, owner_id) -> int:
        count = self._scoped(owner_id).delete(synchronize_session=False)
        db.session.flush()
        return count

    def compact(self, owner_id):
        return compact_order(self._scoped(owner_id))

    def renumber(self, owner_id, ordered_ids: Sequence[str]):
        """
        Persist a whole new ordering in one batch.

        ``ordered_ids`` must name every block of the owner exactly once.
        """
        blocks = {block.id: block for block in self.list(owner_id)}

        if len(ordered_ids) != len(blocks) or set(ordered_ids) != set(blocks):
            raise ValidationError(
                "Reorder must include every block of the document exactly once"
            )

        return apply_order([blocks[block_id] for block_id in ordered_ids])

    def copy_into(self, source_blocks: Iterable[Any], target_owner_id) -> List[Any]:
        """Deep-copy blocks: new ids, same type/content/order_index."""
        if db.session.get(self.owner_model, target_owner_id) is None:
            raise ValidationError("Blocks must belong to an existing document")

        copies = []
        for source in source_blocks:
            block = self.block_model()
            block.owner_id = target_owner_id
            block.type = source.type
            block.content = copy.deepcopy(source.content)
            block.order_index = source.order_index
            db.session.add(block)
            copies.append(block)

        db.session.flush()
        return copies
