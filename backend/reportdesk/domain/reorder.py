from typing import List, Optional, Sequence, Tuple, TypeVar

from reportdesk.domain.exceptions import ValidationError

T = TypeVar("T")


def move(sequence: Sequence[T], source: int, destination: Optional[int]) -> List[T]:
    """
    Remove the item at ``source`` and re-insert it at ``destination``.

    ``destination=None`` means the drag did not land on a drop target.
    """
    items = list(sequence)

    if destination is None or source == destination:
        return items

    for index in (source, destination):
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(items):
            raise ValidationError(
                f"Reorder index {index!r} is outside 0..{len(items) - 1}"
            )

    item = items.pop(source)
    items.insert(destination, item)
    return items


def resolve_drop(ids: Sequence[str], active_id: str, over_id: Optional[str]) -> Optional[Tuple[int, int]]:
    """Translate "drop block A over block B" into (source, destination)."""
    if over_id is None or active_id == over_id:
        return None

    try:
        return ids.index(active_id), ids.index(over_id)
    except ValueError:
        return None


def renumber(ids: Sequence[str]) -> List[Tuple[str, int]]:
    return [(block_id, position) for position, block_id in enumerate(ids)]
