"""
Category-keyed sections (skills, interests).

A category section is a pair of maps sharing one key set::

    skills     = {"Languages": ["Python", "Go"], "Ops": ["Docker"]}
    skillTypes = {"Languages": "work", "Ops": "work"}

``CategoryMap`` owns both maps and is the only place that adds, renames,
removes or reorders categories, so the two key sets cannot drift apart.
Key order is display order.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from cv_endpoint.services.migrator import DEFAULT_CLASSIFIER
from cv_endpoint.services.ordering import MoveDirection, move_adjacent


class CategoryMap:
    """
    Ordered category name -> items map paired with a category name -> classifier map.

    Parameters
    ----------
    items:
        Stored item map.  Anything that is not a dict (for example a legacy
        list or a corrupted value) is replaced by an empty map.
    types:
        Stored classifier map, reset the same way.
    """

    def __init__(self, items: Any, types: Any) -> None:
        self.items: Dict[str, List[Any]] = dict(items) if isinstance(items, dict) else {}
        self.types: Dict[str, Any] = dict(types) if isinstance(types, dict) else {}

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(self, name: str, items: List[Any], classifier: Optional[str] = None) -> None:
        """Set *name* to *items*; an existing category of that name is replaced in place."""
        self.items[name] = items
        self.types[name] = classifier or DEFAULT_CLASSIFIER
        self.reconcile()

    def edit(
        self,
        old_name: str,
        new_name: str,
        items: List[Any],
        classifier: Optional[str] = None,
    ) -> None:
        """
        Update *old_name*, renaming it to *new_name* when they differ.

        A rename deletes the old key before writing the new one, so the
        category moves to the end of the order and a clash with another
        existing category overwrites that category.
        """
        if old_name != new_name:
            self.items.pop(old_name, None)
            self.types.pop(old_name, None)
        self.items[new_name] = items
        self.types[new_name] = classifier or DEFAULT_CLASSIFIER
        self.reconcile()

    def remove(self, name: str) -> None:
        self.items.pop(name, None)
        self.types.pop(name, None)
        self.reconcile()

    def move(self, name: str, direction: MoveDirection) -> bool:
        """Swap *name* with its neighbouring category.  Returns True if the order changed."""
        names = list(self.items)
        if name not in self.items:
            return False
        if not move_adjacent(names, names.index(name), direction):
            return False

        self.items = {key: self.items[key] for key in names}
        self.reconcile()
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def reconcile(self) -> None:
        # type map follows the item map's keys and order
        self.types = {
            key: self.types.get(key) or DEFAULT_CLASSIFIER for key in self.items
        }

    def as_pair(self) -> Tuple[Dict[str, List[Any]], Dict[str, Any]]:
        return dict(self.items), dict(self.types)
