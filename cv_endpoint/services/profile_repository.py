"""
Profile (CV data) repository.

All operations follow the same cycle::

    load (or default) -> mutate in memory -> save full replacement -> export

Malformed input never raises here.  An unknown section name, an index out
of range or a move past either end leaves the document unchanged, but the
document is still saved (bumping ``lastUpdated``) and returned so callers
always get a document back.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from cv_endpoint.models.database_models import PROFILE_KEY
from cv_endpoint.services.categories import CategoryMap
from cv_endpoint.services.document_store import DocumentStore
from cv_endpoint.services.exporter import ContentExporter
from cv_endpoint.services.migrator import normalize_interests
from cv_endpoint.services.ordering import MoveDirection, move_adjacent

logger = logging.getLogger(__name__)

# List-valued sections whose order is caller-controlled
ORDERED_SECTIONS = ("experience", "projects", "education", "languages")

# Category sections and the classifier map paired with each
CATEGORY_SECTIONS = {
    "skills": "skillTypes",
    "interests": "interestTypes",
}

TIMESTAMP_FIELD = "lastUpdated"


def default_profile() -> Dict[str, Any]:
    """Empty profile returned when nothing has been stored yet."""
    return {
        "experience": [],
        "projects": [],
        "skills": {},
        "skillTypes": {},
        "education": [],
        "languages": [],
        "interests": {},
        "interestTypes": {},
        "lastUpdated": None,
    }


def build_profile_document(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Assemble the full profile document from *data*.

    Only known fields are kept; missing ones take their empty default.  The
    interests pair is always migrated to the category-map shape so a save can
    never write the legacy shape back, and every type map is reconciled to
    its item map so the two key sets are equal.
    """
    document = {
        "experience": data.get("experience") or [],
        "projects": data.get("projects") or [],
        "skills": data.get("skills") or {},
        "skillTypes": data.get("skillTypes") or {},
        "education": data.get("education") or [],
        "languages": data.get("languages") or [],
        "interests": data.get("interests") or [],
        "interestTypes": data.get("interestTypes") or {},
        "lastUpdated": data.get("lastUpdated"),
    }
    document = normalize_interests(document)
    for section, types_field in CATEGORY_SECTIONS.items():
        categories = CategoryMap(document[section], document[types_field])
        categories.reconcile()
        document[section], document[types_field] = categories.as_pair()
    return document


class ProfileRepository:
    """Ordered-section and category operations over the single profile document."""

    def __init__(self, store: DocumentStore, exporter: ContentExporter) -> None:
        self.store = store
        self.exporter = exporter

    # ------------------------------------------------------------------
    # Whole document
    # ------------------------------------------------------------------

    async def get(self) -> Optional[Dict[str, Any]]:
        """Stored profile, or None if it was never saved."""
        return await self.store.load(PROFILE_KEY)

    async def get_or_default(self) -> Dict[str, Any]:
        """Stored profile projected onto the current shape, or the empty default."""
        data = await self.get()
        if data is None:
            return default_profile()
        return build_profile_document(data)

    async def save(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Persist *data* as the full profile and export it."""
        document = build_profile_document(data)
        saved = await self.store.save(PROFILE_KEY, document, stamp_field=TIMESTAMP_FIELD)
        await self.exporter.write_profile(saved)
        return saved

    # ------------------------------------------------------------------
    # Ordered sections
    # ------------------------------------------------------------------

    async def add_item(self, section: str, item: Dict[str, Any]) -> Dict[str, Any]:
        data = await self.get_or_default()
        items = self._section_list(data, section)
        if items is not None:
            items.append(item)
        return await self.save(data)

    async def update_item(self, section: str, index: int, item: Dict[str, Any]) -> Dict[str, Any]:
        data = await self.get_or_default()
        items = self._section_list(data, section)
        if items is not None and 0 <= index < len(items):
            items[index] = item
        else:
            logger.debug("update_item: no %s[%s], saving unchanged", section, index)
        return await self.save(data)

    async def remove_item(self, section: str, index: int) -> Dict[str, Any]:
        data = await self.get_or_default()
        items = self._section_list(data, section)
        if items is not None and 0 <= index < len(items):
            del items[index]
        else:
            logger.debug("remove_item: no %s[%s], saving unchanged", section, index)
        return await self.save(data)

    async def move_item(self, section: str, index: int, direction: MoveDirection) -> Dict[str, Any]:
        data = await self.get_or_default()
        items = self._section_list(data, section)
        if items is not None:
            move_adjacent(items, index, direction)
        return await self.save(data)

    @staticmethod
    def _section_list(data: Dict[str, Any], section: str) -> Optional[List[Any]]:
        """
        Return the mutable list for *section*, resetting a non-list value to [].

        Returns None for names that are not ordered sections.
        """
        if section not in ORDERED_SECTIONS:
            logger.warning("Ignoring operation on unknown section %r", section)
            return None
        if not isinstance(data.get(section), list):
            data[section] = []
        return data[section]

    # ------------------------------------------------------------------
    # Category sections
    # ------------------------------------------------------------------

    async def add_category(
        self,
        section: str,
        name: str,
        items: List[Any],
        classifier: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self.get_or_default()
        categories = self._category_map(data, section)
        if categories is not None:
            categories.add(name, items, classifier)
            self._store_categories(data, section, categories)
        return await self.save(data)

    async def edit_category(
        self,
        section: str,
        old_name: str,
        new_name: str,
        items: List[Any],
        classifier: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self.get_or_default()
        categories = self._category_map(data, section)
        if categories is not None:
            categories.edit(old_name, new_name, items, classifier)
            self._store_categories(data, section, categories)
        return await self.save(data)

    async def remove_category(self, section: str, name: str) -> Dict[str, Any]:
        data = await self.get_or_default()
        categories = self._category_map(data, section)
        if categories is not None:
            categories.remove(name)
            self._store_categories(data, section, categories)
        return await self.save(data)

    async def move_category(self, section: str, name: str, direction: MoveDirection) -> Dict[str, Any]:
        data = await self.get_or_default()
        categories = self._category_map(data, section)
        if categories is not None:
            categories.move(name, direction)
            self._store_categories(data, section, categories)
        return await self.save(data)

    @staticmethod
    def _category_map(data: Dict[str, Any], section: str) -> Optional[CategoryMap]:
        types_field = CATEGORY_SECTIONS.get(section)
        if types_field is None:
            logger.warning("Ignoring category operation on unknown section %r", section)
            return None
        return CategoryMap(data.get(section), data.get(types_field))

    @staticmethod
    def _store_categories(data: Dict[str, Any], section: str, categories: CategoryMap) -> None:
        data[section], data[CATEGORY_SECTIONS[section]] = categories.as_pair()
