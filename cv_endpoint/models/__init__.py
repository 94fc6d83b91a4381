"""Database and schema models for the CV endpoint."""
from cv_endpoint.models.database_models import (
    PAGE_CONFIG_KEY,
    PROFILE_KEY,
    StoredDocument,
)
from cv_endpoint.models.schemas import (
    CategoryRequest,
    EducationEntry,
    ExperienceEntry,
    HealthCheckResponse,
    LanguageEntry,
    PageConfigDocument,
    ProfileDocument,
    ProjectEntry,
)

__all__ = [
    # Database models
    "StoredDocument",
    "PROFILE_KEY",
    "PAGE_CONFIG_KEY",
    # Pydantic schemas
    "CategoryRequest",
    "EducationEntry",
    "ExperienceEntry",
    "HealthCheckResponse",
    "LanguageEntry",
    "PageConfigDocument",
    "ProfileDocument",
    "ProjectEntry",
]
