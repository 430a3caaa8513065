import uuid
from typing import Any, Callable, List, Optional

from flask import current_app

from reportdesk.auth_context import Session, current_actor
from reportdesk.domain.blocks import BlockType, default_content, normalize_content
from reportdesk.domain.commands import (
    AddBlock,
    BlockCommand,
    BlockState,
    MoveBlock,
    RemoveBlock,
    UpdateBlockContent,
)
from reportdesk.domain.exceptions import NotFoundError, ValidationError
from reportdesk.domain.invariants.block import assert_block_type
from reportdesk.domain.reorder import resolve_drop
from reportdesk.utils.audit import log_action
from reportdesk.utils.transaction import transactional


class BlockEditor:
    """
    Edits the block collection of one document.

    Every operation re-checks the edit guard against a freshly loaded role
    before touching the store. Commands are applied to ``blocks`` first; if
    the write fails their inverse is applied so ``blocks`` matches the store.
    """

    def __init__(self, kind, document, actor_provider: Callable[[], Session] = current_actor):
        self.kind = kind
        self.document = document
        self._actor_provider = actor_provider
        self.blocks: List[BlockState] = [
            BlockState.from_model(block) for block in kind.store.list(document.id)
        ]

    @property
    def store(self):
        return self.kind.store

    def authorize(self) -> Session:
        actor = self._actor_provider()
        self.kind.assert_can_edit(self.document, actor)
        return actor

    def find(self, block_id) -> BlockState:
        for block in self.blocks:
            if block.id == block_id:
                return block
        raise NotFoundError("Block not found. It may have been deleted.")

    def _execute(self, command: BlockCommand, persist: Callable[[], Any], payload: Optional[dict] = None):
        before = self.blocks
        self.blocks = command.apply(before)

        try:
            with transactional():
                result = persist()
                log_action(
                    action=command.name,
                    entity_type=self.kind.name,
                    entity_id=self.document.id,
                    payload=payload,
                )
        except Exception:
            self.blocks = command.inverse(before).apply(self.blocks)
            current_app.logger.warning(
                "%s on %s %s failed; local blocks reverted",
                command.name, self.kind.name, self.document.id,
            )
            raise

        return result

    # ------------------------
    # Operations
    # ------------------------
    def add_block(self, block_type: str, content: Any = None):
        self.authorize()
        assert_block_type(block_type, self.kind.block_types)
        if content is not None and not isinstance(content, dict):
            raise ValidationError("Block content must be an object")

        content = normalize_content(
            block_type,
            default_content(block_type) if content is None else content,
        )
        order_index = self.store.next_order_index(self.document.id)
        state = BlockState(
            id=str(uuid.uuid4()),
            type=BlockType(block_type).value,
            content=content,
            order_index=order_index,
        )

        return self._execute(
            AddBlock(block=state),
            lambda: self.store.create(
                self.document.id, state.type, state.content, order_index, block_id=state.id
            ),
            payload={"block_id": state.id, "type": state.type, "order_index": order_index},
        )

    def update_block_content(self, block_id: str, content: Any):
        self.authorize()
        block = self.find(block_id)

        if BlockType.lookup(block.type) is not None and not isinstance(content, dict):
            raise ValidationError("Block content must be an object")
        content = normalize_content(block.type, content)

        return self._execute(
            UpdateBlockContent(block_id=block_id, content=content),
            lambda: self.store.update(block_id, content, owner_id=self.document.id),
            payload={"block_id": block_id},
        )

    def delete_block(self, block_id: str) -> BlockState:
        self.authorize()
        removed = self.find(block_id)

        def persist():
            self.store.delete(block_id, owner_id=self.document.id)
            self.store.compact(self.document.id)

        self._execute(RemoveBlock(block_id=block_id), persist, payload={"block_id": block_id})
        return removed

    def reorder(self, source: int, destination: Optional[int]) -> List[BlockState]:
        self.authorize()
        command = MoveBlock(source=source, destination=destination)

        if destination is None or source == destination:
            return self.blocks

        self._execute(
            command,
            lambda: self.store.renumber(self.document.id, [block.id for block in self.blocks]),
            payload={"source": source, "destination": destination},
        )
        return self.blocks

    def move_over(self, active_id: str, over_id: Optional[str]) -> List[BlockState]:
        """Drag gesture form: drop ``active_id`` where ``over_id`` is."""
        self.authorize()
        self.find(active_id)

        drop = resolve_drop([block.id for block in self.blocks], active_id, over_id)
        if drop is None:
            return self.blocks
        return self.reorder(*drop)
