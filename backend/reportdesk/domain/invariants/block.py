from reportdesk.domain.blocks import BlockType
from .exceptions import InvariantViolation


def assert_block_order(blocks):
    orders = [block.order_index for block in blocks]
    if not orders:
        return

    expected = list(range(len(orders)))
    if sorted(orders) != expected:
        raise InvariantViolation(
            f"Block orders are not consecutive starting from 0: {orders}"
        )


def assert_block_type(block_type, allowed_types):
    if not block_type:
        raise InvariantViolation("Block type is required")

    known = BlockType.lookup(block_type)
    if known is None or known not in allowed_types:
        raise InvariantViolation(f"Invalid block type: {block_type}")
