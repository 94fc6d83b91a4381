"""Tests for PageConfigRepository against the test database."""
import json

import pytest

from cv_endpoint.services.page_config import (
    DEFAULT_LAYOUT,
    build_page_config_document,
    coerce_layout,
    default_page_config,
)
from cv_endpoint.services.presets import detect_active_preset, find_preset

IDENTITY = {"name": "Ada", "title": "Engineer", "social": [{"name": "Site", "url": "https://a.example", "rel": "me"}]}
FOOTER = [{"type": "cv-contact", "config": {}}]


def test_coerce_layout_falls_back_to_default():
    assert coerce_layout("two-column") == "two-column"
    assert coerce_layout("three-column") == DEFAULT_LAYOUT
    assert coerce_layout(None) == DEFAULT_LAYOUT


def test_build_document_applies_defaults():
    document = build_page_config_document({"sections": "nope", "hero": "nope"})
    assert document["layout"] == DEFAULT_LAYOUT
    assert document["hero"] == {"enabled": True, "showSocial": True}
    assert document["sections"] == []
    assert document["sidebar"] == []
    assert document["footer"] == []
    assert document["identity"] is None


@pytest.mark.asyncio
async def test_get_or_default_before_any_save(page_repo):
    assert await page_repo.get() is None
    assert await page_repo.get_or_default() == default_page_config()
    assert await page_repo.get_identity() == {}


@pytest.mark.asyncio
async def test_save_layout_keeps_identity(page_repo, frozen_clock):
    await page_repo.save_identity(IDENTITY)

    saved = await page_repo.save_layout(
        "two-column",
        {"enabled": False},
        [{"type": "cv-languages", "config": {}}],
        [{"type": "author-card", "config": {}}],
        FOOTER,
    )

    assert saved["layout"] == "two-column"
    assert saved["hero"] == {"enabled": False}
    assert saved["identity"] == IDENTITY
    assert saved["updatedAt"] == "t2"


@pytest.mark.asyncio
async def test_save_layout_coerces_unknown_layout(page_repo):
    saved = await page_repo.save_layout("three-column", None, [], [], [])
    assert saved["layout"] == DEFAULT_LAYOUT
    assert saved["hero"] == {"enabled": True, "showSocial": True}


@pytest.mark.asyncio
async def test_save_identity_keeps_builder_fields(page_repo):
    await page_repo.save_layout(
        "full-width-hero", {"enabled": True}, [{"type": "cv-skills", "config": {}}], [], FOOTER
    )

    saved = await page_repo.save_identity(IDENTITY)

    assert saved["layout"] == "full-width-hero"
    assert saved["sections"] == [{"type": "cv-skills", "config": {}}]
    assert saved["footer"] == FOOTER
    assert await page_repo.get_identity() == IDENTITY


@pytest.mark.asyncio
async def test_apply_preset_replaces_layout_but_keeps_footer_and_identity(page_repo):
    await page_repo.save_layout("single-column", None, [], [], FOOTER)
    await page_repo.save_identity(IDENTITY)

    saved = await page_repo.apply_preset("full-portfolio")

    preset = find_preset("full-portfolio").to_dict()
    assert saved["layout"] == preset["layout"]
    assert saved["hero"] == preset["hero"]
    assert saved["sections"] == preset["sections"]
    assert saved["sidebar"] == preset["sidebar"]
    assert saved["footer"] == FOOTER
    assert saved["identity"] == IDENTITY
    assert detect_active_preset(saved) == "full-portfolio"


@pytest.mark.asyncio
async def test_apply_unknown_preset_returns_none_without_saving(page_repo):
    assert await page_repo.apply_preset("does-not-exist") is None
    assert await page_repo.get() is None


@pytest.mark.asyncio
async def test_save_exports_page_config_file(page_repo, exporter):
    await page_repo.apply_preset("minimal")

    exported = json.loads(exporter.page_config_path.read_text(encoding="utf-8"))
    assert exported["layout"] == "single-column"
    assert "updatedAt" in exported
