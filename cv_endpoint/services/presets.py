"""
CV page presets and structural preset detection.

A preset is a template, not a snapshot: a page configuration matches a
preset when its layout and the ordered ``type`` sequences of its sections
and sidebar are equal.  Per-entry ``config`` payloads (``maxItems`` and the
like) are ignored, so editing a section's options keeps the preset active.
"""
from __future__ import annotations

import copy
import dataclasses
from typing import Any, Dict, List, Optional, Sequence, Tuple


@dataclasses.dataclass(frozen=True)
class PagePreset:
    id: str
    label: str
    description: str
    layout: str
    hero: Dict[str, Any]
    sections: List[Dict[str, Any]]
    sidebar: List[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(dataclasses.asdict(self))


def _entry(entry_type: str, **config: Any) -> Dict[str, Any]:
    return {"type": entry_type, "config": config}


CV_PRESETS: Tuple[PagePreset, ...] = (
    PagePreset(
        id="professional-cv",
        label="Professional CV",
        description="Clean single-column layout with work-only sections for a professional resume",
        layout="single-column",
        hero={"enabled": True, "showSocial": True},
        sections=[
            _entry("cv-experience-work"),
            _entry("cv-skills-work"),
            _entry("cv-projects-work"),
            _entry("cv-education-work"),
            _entry("cv-languages"),
            _entry("cv-interests-work"),
        ],
        sidebar=[],
    ),
    PagePreset(
        id="full-portfolio",
        label="Full Portfolio",
        description="Two-column layout showcasing both work and personal projects with sidebar",
        layout="two-column",
        hero={"enabled": True, "showSocial": True},
        sections=[
            _entry("cv-experience", maxItems=5),
            _entry("cv-skills"),
            _entry("cv-projects"),
            _entry("cv-education"),
            _entry("cv-languages"),
            _entry("cv-interests"),
        ],
        sidebar=[
            _entry("author-card"),
            _entry("social-activity"),
            _entry("github-repos"),
        ],
    ),
    PagePreset(
        id="minimal",
        label="Minimal",
        description="Concise single-column layout with essential sections only",
        layout="single-column",
        hero={"enabled": True, "showSocial": True},
        sections=[
            _entry("cv-experience-work", maxItems=5),
            _entry("cv-skills-work"),
            _entry("cv-education-work"),
        ],
        sidebar=[],
    ),
)


def _type_sequence(entries: Any) -> List[Any]:
    if not isinstance(entries, list):
        return []
    return [entry.get("type") if isinstance(entry, dict) else None for entry in entries]


def detect_active_preset(
    config: Dict[str, Any],
    presets: Sequence[PagePreset] = CV_PRESETS,
) -> Optional[str]:
    """
    Return the id of the first preset *config* structurally equals, or None.

    Presets are checked in catalog order, so when two presets share a
    fingerprint the earlier one always wins.
    """
    section_types = _type_sequence(config.get("sections"))
    sidebar_types = _type_sequence(config.get("sidebar"))

    for preset in presets:
        if config.get("layout") != preset.layout:
            continue
        if section_types != _type_sequence(preset.sections):
            continue
        if sidebar_types != _type_sequence(preset.sidebar):
            continue
        return preset.id
    return None


def find_preset(preset_id: Any, presets: Sequence[PagePreset] = CV_PRESETS) -> Optional[PagePreset]:
    for preset in presets:
        if preset.id == preset_id:
            return preset
    return None
