"""
Adjacent-swap reordering shared by list sections and category maps.
"""
from __future__ import annotations

import enum
from typing import Any, List


class MoveDirection(str, enum.Enum):
    UP = "up"
    DOWN = "down"


def move_adjacent(items: List[Any], index: int, direction: MoveDirection) -> bool:
    """
    Swap ``items[index]`` with its neighbour in *direction*, in place.

    Moving the first item up or the last item down, or passing an index
    outside the list, leaves *items* unchanged.

    Returns:
        True if a swap happened
    """
    if not 0 <= index < len(items):
        return False

    target = index - 1 if direction == MoveDirection.UP else index + 1
    if not 0 <= target < len(items):
        return False

    items[index], items[target] = items[target], items[index]
    return True
