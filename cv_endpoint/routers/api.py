"""
Public JSON API read by the site generator and the page-composition host.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from cv_endpoint.dependencies.repositories import (
    get_page_config_repository,
    get_profile_repository,
    get_section_registry,
)
from cv_endpoint.models.schemas import PageConfigDocument, ProfileDocument, SectionCatalogResponse
from cv_endpoint.services.page_config import PageConfigRepository
from cv_endpoint.services.profile_repository import ProfileRepository
from cv_endpoint.services.sections import SectionRegistry

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/data.json", response_model=ProfileDocument)
async def get_data(
    repo: ProfileRepository = Depends(get_profile_repository),
) -> ProfileDocument:
    """Profile data; an all-empty profile when nothing was saved yet."""
    return ProfileDocument.model_validate(await repo.get_or_default())


@router.get("/page.json", response_model=Optional[PageConfigDocument])
async def get_page_config(
    repo: PageConfigRepository = Depends(get_page_config_repository),
) -> Optional[PageConfigDocument]:
    """
    Page configuration, or ``null`` when the page was never configured so
    that consumers can tell "use your built-in layout" from "configured".
    """
    config = await repo.get()
    if config is None:
        return None
    return PageConfigDocument.model_validate(config)


@router.get("/sections.json", response_model=SectionCatalogResponse)
async def get_sections(
    registry: SectionRegistry = Depends(get_section_registry),
) -> SectionCatalogResponse:
    """Section types this endpoint can supply data for."""
    return SectionCatalogResponse(
        navigation=registry.navigation_item(),
        shortcut=registry.shortcut_item(),
        sections=registry.sections(),
    )
