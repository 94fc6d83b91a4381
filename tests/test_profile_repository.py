"""Tests for ProfileRepository against the test database."""
import json

import pytest

from cv_endpoint.models.database_models import PROFILE_KEY
from cv_endpoint.services.ordering import MoveDirection


def _job(title: str) -> dict:
    return {"title": title, "company": "Acme", "highlights": []}


async def _seed_experience(profile_repo, *titles: str) -> None:
    for title in titles:
        await profile_repo.add_item("experience", _job(title))


def _titles(document: dict) -> list:
    return [entry["title"] for entry in document["experience"]]


# ---------------------------------------------------------------------------
# Defaults and round trip
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_get_returns_none_until_saved(profile_repo):
    assert await profile_repo.get() is None
    default = await profile_repo.get_or_default()
    assert default["experience"] == []
    assert default["skills"] == {}
    assert default["lastUpdated"] is None


@pytest.mark.asyncio
async def test_round_trip_equals_except_timestamp(profile_repo):
    data = await profile_repo.get_or_default()
    data["languages"].append({"name": "English", "level": "native"})
    data["skills"]["Languages"] = ["Python", "Go"]
    data["skillTypes"]["Languages"] = "work"
    data["interests"]["Outdoors"] = ["Hiking"]
    data["interestTypes"]["Outdoors"] = "personal"

    saved = await profile_repo.save(data)
    loaded = await profile_repo.get()

    assert loaded == saved
    assert loaded["lastUpdated"] is not None
    without_stamp = {k: v for k, v in loaded.items() if k != "lastUpdated"}
    assert without_stamp == {k: v for k, v in data.items() if k != "lastUpdated"}


@pytest.mark.asyncio
async def test_caller_supplied_timestamp_is_overwritten(profile_repo, frozen_clock):
    saved = await profile_repo.save({"lastUpdated": "1999-01-01T00:00:00Z"})
    assert saved["lastUpdated"] == "t1"


@pytest.mark.asyncio
async def test_save_exports_json_file(profile_repo, exporter):
    await profile_repo.add_item("languages", {"name": "Deutsch", "level": "fluent"})

    exported = json.loads(exporter.profile_path.read_text(encoding="utf-8"))
    assert exported["languages"] == [{"name": "Deutsch", "level": "fluent"}]
    assert "lastUpdated" in exported
    assert "_id" not in exported and "key" not in exported


# ---------------------------------------------------------------------------
# Ordered sections
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_add_appends_and_allows_duplicates(profile_repo):
    await _seed_experience(profile_repo, "Dev", "Dev")
    document = await profile_repo.get()
    assert _titles(document) == ["Dev", "Dev"]


@pytest.mark.asyncio
async def test_update_in_range_replaces_entry(profile_repo):
    await _seed_experience(profile_repo, "A", "B")
    document = await profile_repo.update_item("experience", 1, _job("B2"))
    assert _titles(document) == ["A", "B2"]


@pytest.mark.asyncio
async def test_update_and_remove_out_of_range_are_noops(profile_repo, frozen_clock):
    await _seed_experience(profile_repo, "A", "B")

    updated = await profile_repo.update_item("experience", 2, _job("X"))
    assert _titles(updated) == ["A", "B"]

    removed = await profile_repo.remove_item("experience", -1)
    assert _titles(removed) == ["A", "B"]
    # still persisted each time
    assert removed["lastUpdated"] == "t4"


@pytest.mark.asyncio
async def test_remove_deletes_entry(profile_repo):
    await _seed_experience(profile_repo, "A", "B", "C")
    document = await profile_repo.remove_item("experience", 1)
    assert _titles(document) == ["A", "C"]


@pytest.mark.asyncio
async def test_move_up_swaps_adjacent_entries_only(profile_repo):
    await _seed_experience(profile_repo, "A", "B", "C", "D")
    document = await profile_repo.move_item("experience", 2, MoveDirection.UP)
    assert _titles(document) == ["A", "C", "B", "D"]


@pytest.mark.asyncio
async def test_move_down_swaps_adjacent_entries_only(profile_repo):
    await _seed_experience(profile_repo, "A", "B", "C")
    document = await profile_repo.move_item("experience", 0, MoveDirection.DOWN)
    assert _titles(document) == ["B", "A", "C"]


@pytest.mark.asyncio
async def test_move_at_boundaries_is_noop_but_persists(profile_repo, frozen_clock):
    await _seed_experience(profile_repo, "A", "B", "C")

    first = await profile_repo.move_item("experience", 0, MoveDirection.UP)
    assert _titles(first) == ["A", "B", "C"]
    assert first["lastUpdated"] == "t4"

    last = await profile_repo.move_item("experience", 2, MoveDirection.DOWN)
    assert _titles(last) == ["A", "B", "C"]
    assert last["lastUpdated"] == "t5"
    assert (await profile_repo.get())["lastUpdated"] == "t5"


@pytest.mark.asyncio
async def test_unknown_section_is_noop(profile_repo):
    await _seed_experience(profile_repo, "A")

    document = await profile_repo.add_item("hobbies", {"name": "x"})
    assert "hobbies" not in document

    document = await profile_repo.move_item("skills", 0, MoveDirection.DOWN)
    assert _titles(document) == ["A"]


@pytest.mark.asyncio
async def test_malformed_section_is_reset_before_mutation(profile_repo, store):
    await store.save(PROFILE_KEY, {"experience": "corrupted", "skills": {}}, "lastUpdated")

    document = await profile_repo.add_item("experience", _job("A"))

    assert _titles(document) == ["A"]


# ---------------------------------------------------------------------------
# Category sections
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_skill_category_lifecycle_keeps_key_sets_equal(profile_repo):
    steps = [
        profile_repo.add_category("skills", "Languages", ["Python"], "work"),
        profile_repo.add_category("skills", "Tools", ["Vim"], None),
        profile_repo.edit_category("skills", "Languages", "Programming", ["Python", "Go"], "work"),
        profile_repo.move_category("skills", "Programming", MoveDirection.UP),
        profile_repo.remove_category("skills", "Tools"),
        profile_repo.remove_category("skills", "Missing"),
    ]
    for step in steps:
        document = await step
        assert list(document["skills"]) == list(document["skillTypes"])

    assert document["skills"] == {"Programming": ["Python", "Go"]}
    assert document["skillTypes"] == {"Programming": "work"}


@pytest.mark.asyncio
async def test_rename_category_drops_old_key(profile_repo):
    await profile_repo.add_category("skills", "A", ["x"], "personal")
    document = await profile_repo.edit_category("skills", "A", "B", ["x", "y"], "work")
    assert "A" not in document["skills"] and "A" not in document["skillTypes"]
    assert document["skills"]["B"] == ["x", "y"]
    assert document["skillTypes"]["B"] == "work"


@pytest.mark.asyncio
async def test_legacy_interests_are_migrated_not_discarded_on_first_write(profile_repo, store):
    await store.save(
        PROFILE_KEY,
        {"interests": ["Chess", "Docker"], "interestTypes": {"Docker": "work"}},
        "lastUpdated",
    )

    document = await profile_repo.add_category("interests", "Music", ["Jazz"], "personal")

    assert document["interests"] == {
        "Personal": ["Chess"],
        "Work": ["Docker"],
        "Music": ["Jazz"],
    }
    assert document["interestTypes"] == {
        "Personal": "personal",
        "Work": "work",
        "Music": "personal",
    }


@pytest.mark.asyncio
async def test_any_save_writes_current_interest_shape(profile_repo):
    saved = await profile_repo.save(
        {"interests": ["Chess", "Docker"], "interestTypes": {"Docker": "work"}}
    )
    assert saved["interests"] == {"Personal": ["Chess"], "Work": ["Docker"]}
    assert (await profile_repo.get())["interestTypes"] == {"Personal": "personal", "Work": "work"}


@pytest.mark.asyncio
async def test_unknown_category_section_is_noop(profile_repo):
    document = await profile_repo.add_category("experience", "X", ["y"], "work")
    assert document["experience"] == []
    assert document["skills"] == {}


@pytest.mark.asyncio
async def test_save_reconciles_mismatched_type_maps(profile_repo):
    saved = await profile_repo.save(
        {
            "skills": {"Ops": ["Docker"]},
            "skillTypes": {"Orphan": "work"},
            "interests": {"Outdoors": ["Hiking"]},
            "interestTypes": "broken",
        }
    )

    assert saved["skillTypes"] == {"Ops": "personal"}
    assert saved["interestTypes"] == {"Outdoors": "personal"}
    assert list(saved["skills"]) == list(saved["skillTypes"])


@pytest.mark.asyncio
async def test_non_map_skills_are_stored_as_empty_maps(profile_repo):
    saved = await profile_repo.save({"skills": ["Python"], "skillTypes": {"Python": "work"}})
    assert saved["skills"] == {}
    assert saved["skillTypes"] == {}
