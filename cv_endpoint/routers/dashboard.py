"""
CV editor endpoints (profile document).

Every mutation returns the persisted document.  Out-of-range indexes,
unknown section names and moves past either end are not errors: the
unchanged document is saved and returned.

Route summary
-------------
GET  /                               — current profile (defaults if never saved)
POST /save                           — bulk replace the whole profile

POST /{section}/add                  — append an entry    (experience, projects,
POST /{section}/{index}/edit         — replace an entry    education, languages)
POST /{section}/{index}/delete       — remove an entry

POST /{group}/add                    — add a category      (skills, interests)
POST /{group}/{category}/edit        — update / rename a category
POST /{group}/{category}/delete      — remove a category
POST /{group}/{category}/up|down     — reorder a category

Category names may contain "/" (e.g. "CI/CD"), so ``{category}`` is a path
parameter.

POST /{section}/{index}/up|down      — reorder an entry of any list section
"""
import logging
from typing import Any, Type

from fastapi import APIRouter, Depends

from cv_endpoint.dependencies.repositories import get_profile_repository
from cv_endpoint.models.schemas import (
    CategoryRequest,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    ProfileDocument,
    ProfileSaveRequest,
    ProjectEntry,
    WireModel,
)
from cv_endpoint.services.ordering import MoveDirection
from cv_endpoint.services.profile_repository import ProfileRepository
from cv_endpoint.utils.helpers import (
    ParseFailure,
    parse_category_field,
    parse_list_field,
    parse_type_map,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SECTION_ENTRY_MODELS = {
    "experience": ExperienceEntry,
    "projects": ProjectEntry,
    "education": EducationEntry,
    "languages": LanguageEntry,
}

CATEGORY_GROUPS = ("skills", "interests")

DEFAULT_CATEGORY_NAME = "Uncategorized"


# ─── Helpers ──────────────────────────────────────────────────────────────────

def _list_field(body: ProfileSaveRequest, field: str) -> list:
    result = parse_list_field(getattr(body, field))
    if isinstance(result, ParseFailure):
        logger.warning("[CV] Ignoring unparseable %s field: %s", field, result.reason)
        return []
    return result.items


def _interests_field(value: Any) -> Any:
    # A list is the legacy shape; keep it so the migrator can group it
    if isinstance(value, list):
        return value
    return parse_category_field(value)


# ═══════════════════════════════════════════════════════════════════════════════
# WHOLE DOCUMENT
# ═══════════════════════════════════════════════════════════════════════════════

@router.get("/", response_model=ProfileDocument)
async def get_profile(
    repo: ProfileRepository = Depends(get_profile_repository),
) -> ProfileDocument:
    """Current profile for the editor."""
    return ProfileDocument.model_validate(await repo.get_or_default())


@router.post("/save", response_model=ProfileDocument)
async def save_profile(
    body: ProfileSaveRequest,
    repo: ProfileRepository = Depends(get_profile_repository),
) -> ProfileDocument:
    """Replace the whole profile (bulk save from the editor form)."""
    data = {
        "experience": _list_field(body, "experience"),
        "projects": _list_field(body, "projects"),
        "skills": parse_category_field(body.skills),
        "skillTypes": parse_type_map(body.skill_types),
        "education": _list_field(body, "education"),
        "languages": _list_field(body, "languages"),
        "interests": _interests_field(body.interests),
        "interestTypes": parse_type_map(body.interest_types),
    }
    saved = await repo.save(data)
    logger.info("[CV] Saved full profile")
    return ProfileDocument.model_validate(saved)


# ═══════════════════════════════════════════════════════════════════════════════
# LIST SECTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def _register_section_routes(section: str, entry_model: Type[WireModel]) -> None:
    """Add/edit/delete routes for one list section, validated by *entry_model*."""

    @router.post(f"/{section}/add", response_model=ProfileDocument, name=f"add_{section}")
    async def add_entry(
        body: entry_model,  # type: ignore[valid-type]
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        saved = await repo.add_item(section, body.to_document())
        logger.info("[CV] Added %s entry", section)
        return ProfileDocument.model_validate(saved)

    @router.post(f"/{section}/{{index}}/edit", response_model=ProfileDocument, name=f"edit_{section}")
    async def edit_entry(
        index: int,
        body: entry_model,  # type: ignore[valid-type]
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        saved = await repo.update_item(section, index, body.to_document())
        logger.info("[CV] Edited %s[%d]", section, index)
        return ProfileDocument.model_validate(saved)

    @router.post(f"/{section}/{{index}}/delete", response_model=ProfileDocument, name=f"delete_{section}")
    async def delete_entry(
        index: int,
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        saved = await repo.remove_item(section, index)
        logger.info("[CV] Deleted %s[%d]", section, index)
        return ProfileDocument.model_validate(saved)


for _section, _model in SECTION_ENTRY_MODELS.items():
    _register_section_routes(_section, _model)


# ═══════════════════════════════════════════════════════════════════════════════
# CATEGORY SECTIONS
# ═══════════════════════════════════════════════════════════════════════════════

def _register_category_routes(group: str) -> None:
    """Category CRUD and reorder routes for *group* (skills or interests)."""

    @router.post(f"/{group}/add", response_model=ProfileDocument, name=f"add_{group}_category")
    async def add_category(
        body: CategoryRequest,
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        name = body.category or DEFAULT_CATEGORY_NAME
        saved = await repo.add_category(group, name, body.items, body.classifier)
        logger.info("[CV] Added %s category %r", group, name)
        return ProfileDocument.model_validate(saved)

    @router.post(f"/{group}/{{category:path}}/edit", response_model=ProfileDocument, name=f"edit_{group}_category")
    async def edit_category(
        category: str,
        body: CategoryRequest,
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        new_name = body.category or category
        saved = await repo.edit_category(group, category, new_name, body.items, body.classifier)
        logger.info("[CV] Edited %s category %r -> %r", group, category, new_name)
        return ProfileDocument.model_validate(saved)

    @router.post(f"/{group}/{{category:path}}/delete", response_model=ProfileDocument, name=f"delete_{group}_category")
    async def delete_category(
        category: str,
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        saved = await repo.remove_category(group, category)
        logger.info("[CV] Deleted %s category %r", group, category)
        return ProfileDocument.model_validate(saved)

    @router.post(f"/{group}/{{category:path}}/up", response_model=ProfileDocument, name=f"move_{group}_category_up")
    async def move_category_up(
        category: str,
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        saved = await repo.move_category(group, category, MoveDirection.UP)
        return ProfileDocument.model_validate(saved)

    @router.post(f"/{group}/{{category:path}}/down", response_model=ProfileDocument, name=f"move_{group}_category_down")
    async def move_category_down(
        category: str,
        repo: ProfileRepository = Depends(get_profile_repository),
    ) -> ProfileDocument:
        saved = await repo.move_category(group, category, MoveDirection.DOWN)
        return ProfileDocument.model_validate(saved)


for _group in CATEGORY_GROUPS:
    _register_category_routes(_group)


# ═══════════════════════════════════════════════════════════════════════════════
# GENERIC MOVE (registered last so the category routes above win)
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("/{section}/{index}/up", response_model=ProfileDocument)
async def move_up(
    section: str,
    index: int,
    repo: ProfileRepository = Depends(get_profile_repository),
) -> ProfileDocument:
    """Swap an entry with the one above it."""
    return ProfileDocument.model_validate(await repo.move_item(section, index, MoveDirection.UP))


@router.post("/{section}/{index}/down", response_model=ProfileDocument)
async def move_down(
    section: str,
    index: int,
    repo: ProfileRepository = Depends(get_profile_repository),
) -> ProfileDocument:
    """Swap an entry with the one below it."""
    return ProfileDocument.model_validate(await repo.move_item(section, index, MoveDirection.DOWN))
