"""
CV page builder endpoints (page configuration document).

Route summary
-------------
GET  /page                — builder state: config, sections, widgets, presets
POST /page/save           — save layout, hero, sections, sidebar, footer
POST /page/preset         — apply a preset (404 for unknown ids)
GET  /page/identity       — identity block
POST /page/save-identity  — save identity block
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from cv_endpoint.dependencies.repositories import get_page_config_repository, get_section_registry
from cv_endpoint.models.schemas import (
    ApplyPresetRequest,
    IdentityRequest,
    PageBuilderState,
    PageConfigDocument,
    PageLayoutRequest,
    PageSaveResponse,
    SocialLink,
)
from cv_endpoint.services.page_config import LAYOUT_CHOICES, PageConfigRepository
from cv_endpoint.services.presets import CV_PRESETS, detect_active_preset
from cv_endpoint.services.sections import SectionRegistry
from cv_endpoint.utils.helpers import ParseFailure, parse_json_object, parse_list_field

logger = logging.getLogger(__name__)

router = APIRouter()


# ─── Helpers ──────────────────────────────────────────────────────────────────

def _entries(value: Any, field: str) -> List[Any]:
    result = parse_list_field(value)
    if isinstance(result, ParseFailure):
        logger.warning("[CV Page] Ignoring unparseable %s: %s", field, result.reason)
        return []
    return result.items


def parse_social_links(value: Any) -> List[Dict[str, str]]:
    """Social links from a list or index-keyed map; entries with neither name nor url are skipped."""
    links: List[Dict[str, str]] = []
    for entry in _entries(value, "social"):
        if not isinstance(entry, dict) or not (entry.get("name") or entry.get("url")):
            continue
        links.append(
            SocialLink(
                name=entry.get("name") or "",
                url=entry.get("url") or "",
                rel=entry.get("rel") or "me",
                icon=entry.get("icon") or "",
            ).model_dump()
        )
    return links


# ═══════════════════════════════════════════════════════════════════════════════
# BUILDER
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("", response_model=PageBuilderState)
async def get_builder(
    repo: PageConfigRepository = Depends(get_page_config_repository),
    registry: SectionRegistry = Depends(get_section_registry),
) -> PageBuilderState:
    """Current (or default) configuration plus everything needed to edit it."""
    config = await repo.get_or_default()
    return PageBuilderState(
        config=PageConfigDocument.model_validate(config),
        sections=registry.builder_sections(),
        widgets=registry.widgets(),
        presets=[preset.to_dict() for preset in CV_PRESETS],
        active_preset_id=detect_active_preset(config, CV_PRESETS),
        layouts=LAYOUT_CHOICES,
    )


@router.post("/save", response_model=PageSaveResponse)
async def save_layout(
    body: PageLayoutRequest,
    repo: PageConfigRepository = Depends(get_page_config_repository),
) -> PageSaveResponse:
    """Save the builder tab.  Unknown layouts fall back to single-column."""
    saved = await repo.save_layout(
        layout=body.layout,
        hero=parse_json_object(body.hero),
        sections=_entries(body.sections, "sections"),
        sidebar=_entries(body.sidebar, "sidebar"),
        footer=_entries(body.footer, "footer"),
    )
    logger.info("[CV Page] Saved layout %r", saved["layout"])
    return PageSaveResponse(
        message="Configuration saved",
        config=PageConfigDocument.model_validate(saved),
    )


@router.post("/preset", response_model=PageSaveResponse)
async def apply_preset(
    body: ApplyPresetRequest,
    repo: PageConfigRepository = Depends(get_page_config_repository),
) -> PageSaveResponse:
    """Apply a preset, keeping the current footer and identity."""
    saved = await repo.apply_preset(body.preset_id)
    if saved is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown preset: {body.preset_id}",
        )
    return PageSaveResponse(
        message=f"Preset {body.preset_id} applied",
        config=PageConfigDocument.model_validate(saved),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# IDENTITY
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("/identity", response_model=Dict[str, Any])
async def get_identity(
    repo: PageConfigRepository = Depends(get_page_config_repository),
) -> Dict[str, Any]:
    """Identity block, or an empty object when none was saved."""
    return await repo.get_identity()


@router.post("/save-identity", response_model=PageSaveResponse)
async def save_identity(
    body: IdentityRequest,
    repo: PageConfigRepository = Depends(get_page_config_repository),
) -> PageSaveResponse:
    """Save the identity tab, keeping layout and sections."""
    identity = body.to_document()
    identity["social"] = parse_social_links(body.social)
    saved = await repo.save_identity(identity)
    logger.info("[CV Page] Saved identity")
    return PageSaveResponse(
        message="CV identity saved",
        config=PageConfigDocument.model_validate(saved),
    )
