"""
CV page configuration repository.

The page configuration says how the CV page is composed: the layout
variant, the ordered main sections, sidebar widgets, footer entries and the
identity block shown in the hero.  Like the profile it is stored and
exported as one whole document.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from cv_endpoint.models.database_models import PAGE_CONFIG_KEY
from cv_endpoint.services.document_store import DocumentStore
from cv_endpoint.services.exporter import ContentExporter
from cv_endpoint.services.presets import CV_PRESETS, PagePreset, find_preset

logger = logging.getLogger(__name__)

VALID_LAYOUTS = ("single-column", "two-column", "full-width-hero")
DEFAULT_LAYOUT = "single-column"

LAYOUT_CHOICES = [
    {"id": "single-column", "label": "Single Column"},
    {"id": "two-column", "label": "Two Column with Sidebar"},
    {"id": "full-width-hero", "label": "Full-width Hero + Grid"},
]

TIMESTAMP_FIELD = "updatedAt"


def default_hero() -> Dict[str, bool]:
    return {"enabled": True, "showSocial": True}


def default_page_config() -> Dict[str, Any]:
    """Configuration used before anything has been saved: the work-oriented CV."""
    return {
        "layout": DEFAULT_LAYOUT,
        "hero": default_hero(),
        "sections": [
            {"type": "cv-experience-work", "config": {}},
            {"type": "cv-skills-work", "config": {}},
            {"type": "cv-projects-work", "config": {}},
            {"type": "cv-education-work", "config": {}},
            {"type": "cv-languages", "config": {}},
            {"type": "cv-interests-work", "config": {}},
        ],
        "sidebar": [],
        "footer": [],
        "identity": None,
    }


def coerce_layout(layout: Any) -> str:
    return layout if layout in VALID_LAYOUTS else DEFAULT_LAYOUT


def build_page_config_document(config: Dict[str, Any]) -> Dict[str, Any]:
    """Full replacement document with defaults applied and the layout validated."""
    hero = config.get("hero")
    return {
        "layout": coerce_layout(config.get("layout")),
        "hero": hero if isinstance(hero, dict) else default_hero(),
        "sections": _as_list(config.get("sections")),
        "sidebar": _as_list(config.get("sidebar")),
        "footer": _as_list(config.get("footer")),
        "identity": config.get("identity") or None,
        "updatedAt": config.get("updatedAt"),
    }


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class PageConfigRepository:
    """Load, save, preset application and identity editing for the page config."""

    def __init__(self, store: DocumentStore, exporter: ContentExporter) -> None:
        self.store = store
        self.exporter = exporter

    async def get(self) -> Optional[Dict[str, Any]]:
        """Stored configuration, or None if the page was never configured."""
        return await self.store.load(PAGE_CONFIG_KEY)

    async def get_or_default(self) -> Dict[str, Any]:
        config = await self.get()
        return config if config is not None else default_page_config()

    async def save(self, config: Dict[str, Any]) -> Dict[str, Any]:
        document = build_page_config_document(config)
        saved = await self.store.save(PAGE_CONFIG_KEY, document, stamp_field=TIMESTAMP_FIELD)
        await self.exporter.write_page_config(saved)
        return saved

    async def save_layout(
        self,
        layout: Any,
        hero: Optional[Dict[str, Any]],
        sections: List[Any],
        sidebar: List[Any],
        footer: List[Any],
    ) -> Dict[str, Any]:
        """Save the builder tab; the identity edited on the other tab is kept."""
        current = await self.get() or {}
        return await self.save(
            {
                "layout": layout,
                "hero": hero,
                "sections": sections,
                "sidebar": sidebar,
                "footer": footer,
                "identity": current.get("identity"),
            }
        )

    async def apply_preset(
        self,
        preset_id: Any,
        presets=CV_PRESETS,
    ) -> Optional[Dict[str, Any]]:
        """
        Replace layout, hero, sections and sidebar with a preset's.

        Footer and identity are kept.  Returns None, without saving, when
        *preset_id* is not in the catalog.
        """
        preset: Optional[PagePreset] = find_preset(preset_id, presets)
        if preset is None:
            logger.warning("[CV Page] Unknown preset %r", preset_id)
            return None

        current = await self.get() or {}
        template = preset.to_dict()
        saved = await self.save(
            {
                "layout": template["layout"],
                "hero": template["hero"],
                "sections": template["sections"],
                "sidebar": template["sidebar"],
                "footer": current.get("footer") or [],
                "identity": current.get("identity"),
            }
        )
        logger.info("[CV Page] Applied preset: %s", preset.label)
        return saved

    async def get_identity(self) -> Dict[str, Any]:
        config = await self.get_or_default()
        return config.get("identity") or {}

    async def save_identity(self, identity: Dict[str, Any]) -> Dict[str, Any]:
        """Save the identity tab; everything the builder tab owns is kept."""
        current = await self.get() or {}
        return await self.save(
            {
                "layout": current.get("layout") or DEFAULT_LAYOUT,
                "hero": current.get("hero"),
                "sections": current.get("sections") or [],
                "sidebar": current.get("sidebar") or [],
                "footer": current.get("footer") or [],
                "identity": identity,
            }
        )
