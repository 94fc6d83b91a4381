"""
Interests schema migration.

Older installations stored interests as a flat list plus an
``interestTypes`` map from each interest to its classifier::

    interests     = ["Chess", "Docker"]
    interestTypes = {"Docker": "work"}

The current shape groups interests by category, exactly like skills::

    interests     = {"Personal": ["Chess"], "Work": ["Docker"]}
    interestTypes = {"Personal": "personal", "Work": "work"}

The legacy shape only ever carried a binary classifier, so migration groups
into the two fixed categories "Work" and "Personal".  Both functions are
total over every input shape and idempotent: their output is already in the
current shape and passes through unchanged on the next run.
"""
from __future__ import annotations

from typing import Any, Dict, List, Tuple

DEFAULT_CLASSIFIER = "personal"
WORK_CLASSIFIER = "work"

WORK_CATEGORY = "Work"
PERSONAL_CATEGORY = "Personal"


def _category_for(classifier: Any) -> str:
    return WORK_CATEGORY if classifier == WORK_CLASSIFIER else PERSONAL_CATEGORY


def _legacy_classifier(item: Any, legacy_types: Any) -> Any:
    if isinstance(legacy_types, dict) and isinstance(item, str):
        return legacy_types.get(item, DEFAULT_CLASSIFIER)
    return DEFAULT_CLASSIFIER


def _group_legacy(
    interests: List[Any], interest_types: Any
) -> Tuple[Dict[str, List[Any]], Dict[str, Any]]:
    groups: Dict[str, List[Any]] = {}
    types: Dict[str, Any] = {}
    for item in interests:
        classifier = _legacy_classifier(item, interest_types)
        category = _category_for(classifier)
        groups.setdefault(category, []).append(item)
        # last item seen wins for the category's classifier
        types[category] = classifier
    return groups, types


def migrate_interests(interests: Any, interest_types: Any) -> Dict[str, List[Any]]:
    """Return *interests* in the current category-map shape."""
    if isinstance(interests, dict):
        return interests
    if isinstance(interests, list) and interests:
        groups, _ = _group_legacy(interests, interest_types)
        return groups
    return {}


def migrate_interest_types(interests: Any, interest_types: Any) -> Dict[str, Any]:
    """Return the ``interestTypes`` map matching ``migrate_interests``."""
    if isinstance(interests, dict):
        return interest_types if isinstance(interest_types, dict) else {}
    if isinstance(interests, list) and interests:
        _, types = _group_legacy(interests, interest_types)
        return types
    return {}


def normalize_interests(document: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of *document* with the interests pair in current shape.

    Other fields are left untouched.
    """
    interests = document.get("interests")
    interest_types = document.get("interestTypes")

    normalized = dict(document)
    normalized["interests"] = migrate_interests(interests, interest_types)
    normalized["interestTypes"] = migrate_interest_types(interests, interest_types)
    return normalized
