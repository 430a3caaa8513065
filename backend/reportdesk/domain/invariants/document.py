from .block import assert_block_order
from .exceptions import InvariantViolation


def assert_submittable(document, blocks):
    """A document needs some content before it can go for approval."""
    if not blocks:
        raise InvariantViolation("Cannot submit a document without any blocks.")

    assert_block_order(blocks)
