"""
Editor commands over an in-memory block sequence.

Each command is applied to the local sequence first and persisted after.
If persistence fails the editor applies ``inverse(before)`` so local state
matches the store again. Every ``apply`` returns a sequence renumbered
0..n-1.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Optional, Sequence

from reportdesk.domain.exceptions import NotFoundError
from reportdesk.domain.reorder import move


@dataclass(frozen=True)
class BlockState:
    id: str
    type: str
    content: Any
    order_index: int

    @classmethod
    def from_model(cls, block) -> "BlockState":
        return cls(
            id=block.id,
            type=block.type,
            content=block.content,
            order_index=block.order_index,
        )


def _renumbered(blocks: Sequence[BlockState]) -> List[BlockState]:
    return [
        block if block.order_index == index else replace(block, order_index=index)
        for index, block in enumerate(blocks)
    ]


def _position(blocks: Sequence[BlockState], block_id: str) -> int:
    for index, block in enumerate(blocks):
        if block.id == block_id:
            return index
    raise NotFoundError(f"Block {block_id} not found")


class BlockCommand:
    name = "block"

    def apply(self, blocks: Sequence[BlockState]) -> List[BlockState]:
        raise NotImplementedError

    def inverse(self, before: Sequence[BlockState]) -> "BlockCommand":
        raise NotImplementedError


@dataclass(frozen=True)
class AddBlock(BlockCommand):
    block: BlockState
    name = "block.create"

    def apply(self, blocks):
        return _renumbered([*blocks, self.block])

    def inverse(self, before):
        return RemoveBlock(block_id=self.block.id)


@dataclass(frozen=True)
class InsertBlock(BlockCommand):
    block: BlockState
    position: int
    name = "block.restore"

    def apply(self, blocks):
        items = list(blocks)
        items.insert(min(self.position, len(items)), self.block)
        return _renumbered(items)

    def inverse(self, before):
        return RemoveBlock(block_id=self.block.id)


@dataclass(frozen=True)
class RemoveBlock(BlockCommand):
    block_id: str
    name = "block.delete"

    def apply(self, blocks):
        _position(blocks, self.block_id)
        return _renumbered([b for b in blocks if b.id != self.block_id])

    def inverse(self, before):
        position = _position(before, self.block_id)
        return InsertBlock(block=before[position], position=position)


@dataclass(frozen=True)
class UpdateBlockContent(BlockCommand):
    block_id: str
    content: Any
    name = "block.update"

    def apply(self, blocks):
        position = _position(blocks, self.block_id)
        items = list(blocks)
        items[position] = replace(items[position], content=self.content)
        return _renumbered(items)

    def inverse(self, before):
        previous = before[_position(before, self.block_id)]
        return UpdateBlockContent(block_id=self.block_id, content=previous.content)


@dataclass(frozen=True)
class MoveBlock(BlockCommand):
    source: int
    destination: Optional[int]
    name = "block.reorder"

    def apply(self, blocks):
        return _renumbered(move(blocks, self.source, self.destination))

    def inverse(self, before):
        if self.destination is None:
            return MoveBlock(source=self.source, destination=None)
        return MoveBlock(source=self.destination, destination=self.source)
