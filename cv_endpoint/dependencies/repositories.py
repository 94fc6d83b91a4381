"""
Repository and registry dependencies for FastAPI routes.

Each request gets repositories bound to its own database session.  Tests
override ``get_exporter`` to redirect export files into a temporary
directory.
"""
from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from cv_endpoint.database import get_db
from cv_endpoint.services.document_store import DocumentStore
from cv_endpoint.services.exporter import ContentExporter
from cv_endpoint.services.page_config import PageConfigRepository
from cv_endpoint.services.profile_repository import ProfileRepository
from cv_endpoint.services.sections import SectionRegistry


async def get_document_store(db: AsyncSession = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


async def get_exporter() -> ContentExporter:
    return ContentExporter()


async def get_profile_repository(
    store: DocumentStore = Depends(get_document_store),
    exporter: ContentExporter = Depends(get_exporter),
) -> ProfileRepository:
    return ProfileRepository(store, exporter)


async def get_page_config_repository(
    store: DocumentStore = Depends(get_document_store),
    exporter: ContentExporter = Depends(get_exporter),
) -> PageConfigRepository:
    return PageConfigRepository(store, exporter)


async def get_section_registry(request: Request) -> SectionRegistry:
    """The registry owned by the application (see ``create_app``)."""
    return request.app.state.section_registry
