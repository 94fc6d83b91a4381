"""
Pydantic schemas for request/response validation.

Profile entries keep the field names of the exported ``cv.json`` (``startDate``,
``experienceType`` ...) on the wire through aliases; Python code uses
snake_case.
"""
from pydantic import AliasChoices, BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Optional, List, Dict, Any, Union
from datetime import datetime

from cv_endpoint.utils.helpers import parse_comma_list, parse_lines


class WireModel(BaseModel):
    """Base for models that accept and emit camelCase wire names.

    Blank values (``None`` or ``""``) fall back to the field default, the way
    the dashboard forms have always treated empty inputs.
    """

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_blank_values(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None and value != ""}
        return data

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Profile entries
# ---------------------------------------------------------------------------

class ExperienceEntry(WireModel):
    """A position in the work history."""

    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = Field("", alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    employment_type: str = Field("full-time", alias="type")
    classification: str = Field("personal", alias="experienceType")
    description: str = ""
    highlights: List[str] = Field(default_factory=list)

    @field_validator("highlights", mode="before")
    @classmethod
    def _split_highlights(cls, value: Any) -> List[str]:
        return parse_lines(value)


class ProjectEntry(WireModel):
    """A personal or work project."""

    name: str = ""
    url: str = ""
    description: str = ""
    # dashboard forms post the list as "tags"
    technologies: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("tags", "technologies"),
    )
    status: str = "active"
    classification: str = Field("personal", alias="projectType")
    start_date: str = Field("", alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")

    @field_validator("technologies", mode="before")
    @classmethod
    def _split_technologies(cls, value: Any) -> List[str]:
        return parse_comma_list(value)


class EducationEntry(WireModel):
    """A degree, certification or course."""

    degree: str = ""
    institution: str = ""
    location: str = ""
    start_date: str = Field("", alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    classification: str = Field("personal", alias="educationType")
    description: str = ""


class LanguageEntry(WireModel):
    """A spoken language and proficiency level."""

    name: str = ""
    level: str = "intermediate"


class CategoryRequest(BaseModel):
    """Add or edit a skill/interest category.

    ``category`` is optional on edit (the current name is kept).  ``items``
    accepts a list or a comma-separated string.
    """

    category: Optional[str] = None
    items: List[str] = Field(default_factory=list)
    classifier: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("classifier", "skillType", "interestType"),
        description="personal or work",
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("items", mode="before")
    @classmethod
    def _split_items(cls, value: Any) -> List[str]:
        return parse_comma_list(value)


class ProfileSaveRequest(BaseModel):
    """Bulk replacement of the profile.

    Fields are loosely typed on purpose: list sections may arrive as lists,
    index-keyed maps or JSON strings and are normalised by the router.
    """

    experience: Any = None
    projects: Any = None
    skills: Any = None
    skill_types: Any = Field(None, alias="skillTypes")
    education: Any = None
    languages: Any = None
    interests: Any = None
    interest_types: Any = Field(None, alias="interestTypes")

    model_config = ConfigDict(populate_by_name=True)


class ProfileDocument(WireModel):
    """The stored profile as returned to callers."""

    experience: List[Any] = Field(default_factory=list)
    projects: List[Any] = Field(default_factory=list)
    skills: Dict[str, Any] = Field(default_factory=dict)
    skill_types: Dict[str, Any] = Field(default_factory=dict, alias="skillTypes")
    education: List[Any] = Field(default_factory=list)
    languages: List[Any] = Field(default_factory=list)
    interests: Union[Dict[str, Any], List[Any]] = Field(default_factory=dict)
    interest_types: Dict[str, Any] = Field(default_factory=dict, alias="interestTypes")
    last_updated: Optional[str] = Field(None, alias="lastUpdated")


# ---------------------------------------------------------------------------
# Page configuration
# ---------------------------------------------------------------------------

class PageLayoutRequest(BaseModel):
    """Builder tab save.  Structured fields may also arrive as JSON strings."""

    layout: Optional[str] = None
    hero: Any = None
    sections: Any = None
    sidebar: Any = None
    footer: Any = None


class ApplyPresetRequest(BaseModel):
    preset_id: str = Field(..., alias="presetId")

    model_config = ConfigDict(populate_by_name=True)


class SocialLink(BaseModel):
    name: str = ""
    url: str = ""
    rel: str = "me"
    icon: str = ""


class IdentityRequest(WireModel):
    """Identity tab save.  ``social`` may be a list or an index-keyed map."""

    name: str = ""
    avatar: str = ""
    title: str = ""
    pronoun: str = ""
    bio: str = ""
    description: str = ""
    locality: str = ""
    country: str = ""
    org: str = ""
    url: str = ""
    email: str = ""
    key_url: str = Field("", alias="keyUrl")
    social: Any = None


class PageConfigDocument(WireModel):
    """The stored page configuration as returned to callers."""

    layout: str
    hero: Dict[str, Any] = Field(default_factory=dict)
    sections: List[Any] = Field(default_factory=list)
    sidebar: List[Any] = Field(default_factory=list)
    footer: List[Any] = Field(default_factory=list)
    identity: Optional[Dict[str, Any]] = None
    updated_at: Optional[str] = Field(None, alias="updatedAt")


class PageSaveResponse(BaseModel):
    success: bool = True
    message: str
    config: PageConfigDocument


class PageBuilderState(BaseModel):
    """Everything the page builder UI needs in one response."""

    config: PageConfigDocument
    sections: List[Dict[str, Any]]
    widgets: List[Dict[str, Any]]
    presets: List[Dict[str, Any]]
    active_preset_id: Optional[str] = None
    layouts: List[Dict[str, str]]


class SectionCatalogResponse(BaseModel):
    """Registration payload for the page-composition host."""

    navigation: Dict[str, Any]
    shortcut: Dict[str, Any]
    sections: List[Dict[str, Any]]


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

class HealthCheckResponse(BaseModel):
    """Schema for health check response."""

    status: str
    database: str
    timestamp: datetime
