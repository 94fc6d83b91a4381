"""
Catalog of CV section types offered to an external page-composition host.

The registry is built once by ``create_app`` and kept on ``app.state``;
routers reach it through the ``get_section_registry`` dependency.
"""
from __future__ import annotations

import copy
import dataclasses
from typing import Any, Dict, List, Optional


def _max_items_schema() -> Dict[str, Any]:
    return {"type": "number", "label": "Max items", "min": 1, "max": 50}


def _boolean_schema(label: str) -> Dict[str, Any]:
    return {"type": "boolean", "label": label}


@dataclasses.dataclass(frozen=True)
class SectionDescriptor:
    id: str
    label: str
    description: str
    icon: str
    default_config: Dict[str, Any] = dataclasses.field(default_factory=dict)
    config_schema: Dict[str, Any] = dataclasses.field(default_factory=dict)

    def to_dict(self, data_endpoint: Optional[str]) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "icon": self.icon,
            "dataEndpoint": data_endpoint,
            "defaultConfig": copy.deepcopy(self.default_config),
            "configSchema": copy.deepcopy(self.config_schema),
        }


def _experience(section_id: str, label: str, description: str, icon: str) -> SectionDescriptor:
    return SectionDescriptor(
        id=section_id,
        label=label,
        description=description,
        icon=icon,
        default_config={"maxItems": 10, "showHighlights": True},
        config_schema={
            "maxItems": _max_items_schema(),
            "showHighlights": _boolean_schema("Show highlights"),
        },
    )


def _projects(section_id: str, label: str, description: str, icon: str) -> SectionDescriptor:
    return SectionDescriptor(
        id=section_id,
        label=label,
        description=description,
        icon=icon,
        default_config={"maxItems": 10, "showTechnologies": True},
        config_schema={
            "maxItems": _max_items_schema(),
            "showTechnologies": _boolean_schema("Show technologies"),
        },
    )


CV_SECTIONS = (
    _experience("cv-experience", "Experience (All)", "All experience items (personal and work)", "briefcase"),
    SectionDescriptor("cv-skills", "Skills (All)", "All skills grouped by category", "zap"),
    SectionDescriptor("cv-education", "Education & Languages (All)", "All education items and languages", "book"),
    _projects("cv-projects-personal", "Personal Projects", "Personal and side projects", "folder"),
    _projects("cv-projects-work", "Work Projects", "Professional and work-related projects", "briefcase"),
    SectionDescriptor("cv-interests", "Interests (All)", "All interests and hobbies", "heart"),
    _experience("cv-experience-personal", "Personal Experience", "Volunteer work and side projects", "heart"),
    _experience("cv-experience-work", "Work Experience", "Professional experience timeline", "briefcase"),
    SectionDescriptor("cv-education-personal", "Personal Education", "Self-study and online courses", "heart"),
    SectionDescriptor("cv-education-work", "Work Education", "Degrees and certifications", "book"),
    SectionDescriptor("cv-skills-personal", "Personal Skills", "Personal and hobby-related skills", "heart"),
    SectionDescriptor("cv-skills-work", "Professional Skills", "Work-related technical skills", "zap"),
    SectionDescriptor("cv-interests-personal", "Personal Interests", "Personal hobbies and interests", "heart"),
    SectionDescriptor("cv-interests-work", "Professional Interests", "Work-related interests and topics", "briefcase"),
    SectionDescriptor("cv-languages", "Languages", "Language proficiency list", "globe"),
)

# Built-in section the page builder always offers alongside the CV sections
CUSTOM_HTML_SECTION = {
    "id": "custom-html",
    "label": "Custom HTML",
    "description": "Add custom HTML content",
    "icon": "code",
    "sourcePlugin": "Built-in",
}


class SectionRegistry:
    """
    Section descriptors for this endpoint plus widgets discovered by the host.

    Parameters
    ----------
    mount_path:
        Where the endpoint is mounted; every descriptor's ``dataEndpoint``
        points at ``<mount_path>/data.json``.
    """

    def __init__(self, mount_path: str, sections=CV_SECTIONS) -> None:
        self.mount_path = mount_path.rstrip("/") or "/"
        self._sections = tuple(sections)
        self._widgets: List[Dict[str, Any]] = []

    @property
    def data_endpoint(self) -> str:
        return f"{self.mount_path.rstrip('/')}/data.json"

    def sections(self) -> List[Dict[str, Any]]:
        return [section.to_dict(self.data_endpoint) for section in self._sections]

    def builder_sections(self) -> List[Dict[str, Any]]:
        return self.sections() + [dict(CUSTOM_HTML_SECTION)]

    def register_widgets(self, widgets: List[Dict[str, Any]]) -> None:
        """Replace the widget list reported by the page-composition host."""
        self._widgets = [dict(widget) for widget in widgets]

    def widgets(self) -> List[Dict[str, Any]]:
        return [dict(widget) for widget in self._widgets]

    def navigation_item(self) -> Dict[str, Any]:
        return {"href": self.mount_path, "text": "cv.title", "requiresDatabase": True}

    def shortcut_item(self) -> Dict[str, Any]:
        return {
            "url": self.mount_path,
            "name": "cv.title",
            "iconName": "briefcase",
            "requiresDatabase": True,
        }
