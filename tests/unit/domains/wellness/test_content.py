"""Unit tests for the content catalog: YAML loading, registry indexing and validation."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from terrain.domains.wellness.content.loader import (
    DEFAULT_PACK_DIR,
    CatalogError,
    CatalogValidationError,
    candidate_from_dict,
    load_content_directory,
    load_content_file,
)
from terrain.domains.wellness.content.registry import ContentRegistry
from terrain.domains.wellness.content.validator import (
    validate_content_directory,
    validate_content_file,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _write_pack(directory: Path, name: str, body: str) -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(body).lstrip())
    return path


TEA_PACK = """
    version: "1.0.0"
    kind: ingredient
    items:
      - id: chamomile
        display_name: Chamomile
        tags: [calms_shen, cooling]
        goals: [sleep]
        seasons: [all_year]
"""


# ---------------------------------------------------------------------------
# Bundled packs
# ---------------------------------------------------------------------------

class TestBundledPacks:
    def test_bundled_packs_validate_cleanly(self):
        count, errors = validate_content_directory(DEFAULT_PACK_DIR)
        assert errors == []
        assert count == 27

    def test_bundled_packs_load_by_kind(self, content_registry: ContentRegistry):
        assert len(content_registry.ingredients) == 16
        assert len(content_registry.routines) == 11
        assert content_registry.get("ginger").avoid_for_hours == 2

    def test_tag_index(self, content_registry: ContentRegistry):
        warming = {c.id for c in content_registry.find_by_tag("warming")}
        assert "ginger" in warming
        assert "chamomile" not in warming


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class TestLoader:
    def test_load_file(self, tmp_path):
        path = _write_pack(tmp_path, "tea.yaml", TEA_PACK)
        [candidate] = load_content_file(path)
        assert candidate.id == "chamomile"
        assert candidate.kind == "ingredient"
        assert candidate.tags == frozenset({"calms_shen", "cooling"})
        assert candidate.avoid_for_hours == 0

    def test_underscore_files_skipped(self, tmp_path):
        _write_pack(tmp_path, "_draft.yaml", TEA_PACK)
        registry = ContentRegistry()
        assert load_content_directory(tmp_path, registry) == 0
        assert len(registry) == 0

    def test_bad_file_does_not_block_others(self, tmp_path):
        _write_pack(tmp_path, "a_broken.yaml", "- just\n- a list\n")
        _write_pack(tmp_path, "b_tea.yaml", TEA_PACK)
        registry = ContentRegistry()
        assert load_content_directory(tmp_path, registry) == 1
        assert registry.get("chamomile") is not None

    def test_missing_directory_loads_nothing(self, tmp_path):
        assert load_content_directory(tmp_path / "nope", ContentRegistry()) == 0

    def test_non_mapping_raises(self, tmp_path):
        path = _write_pack(tmp_path, "list.yaml", "- a\n")
        with pytest.raises(CatalogError):
            load_content_file(path)

    def test_unknown_kind_raises(self, tmp_path):
        path = _write_pack(tmp_path, "x.yaml", 'version: "1.0"\nkind: gadget\nitems: []\n')
        with pytest.raises(CatalogValidationError):
            load_content_file(path)


class TestCandidateFromDict:
    def test_missing_id(self):
        with pytest.raises(CatalogValidationError, match="'id'"):
            candidate_from_dict({"display_name": "Nameless"}, "ingredient")

    def test_negative_avoid_hours(self):
        with pytest.raises(CatalogValidationError, match="avoid_for_hours"):
            candidate_from_dict({"id": "x", "display_name": "X", "avoid_for_hours": -1}, "routine")

    def test_single_string_tag_accepted(self):
        candidate = candidate_from_dict({"id": "x", "display_name": "X", "tags": "warming"}, "routine")
        assert candidate.tags == frozenset({"warming"})

    def test_non_string_tags_rejected(self):
        with pytest.raises(CatalogValidationError, match="tags"):
            candidate_from_dict({"id": "x", "display_name": "X", "tags": [1, 2]}, "routine")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_duplicate_id_raises(self):
        registry = ContentRegistry()
        candidate = candidate_from_dict({"id": "x", "display_name": "X"}, "routine")
        registry.register(candidate)
        with pytest.raises(ValueError, match="Duplicate"):
            registry.register(candidate)

    def test_registration_order_kept(self):
        registry = ContentRegistry()
        for cid in ("b", "a", "c"):
            registry.register(candidate_from_dict({"id": cid, "display_name": cid}, "routine"))
        assert [c.id for c in registry.routines] == ["b", "a", "c"]
        assert registry.ingredients == []


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------

class TestValidator:
    def test_unknown_vocabulary_reported(self, tmp_path):
        path = _write_pack(tmp_path, "odd.yaml", """
            version: "1.0.0"
            kind: routine
            items:
              - id: odd
                display_name: Odd
                tags: [warming, sparkly]
                goals: [fame]
                terrain_fit: [lukewarm]
        """)
        candidates, errors = validate_content_file(path)
        assert len(candidates) == 1
        assert any("unknown tag 'sparkly'" in e for e in errors)
        assert any("unknown goal 'fame'" in e for e in errors)
        assert any("unknown terrain id 'lukewarm'" in e for e in errors)

    def test_avoid_hours_need_notes(self, tmp_path):
        path = _write_pack(tmp_path, "avoid.yaml", """
            version: "1.0.0"
            kind: ingredient
            items:
              - id: coffee
                display_name: Coffee
                tags: [moves_qi]
                avoid_for_hours: 6
        """)
        _, errors = validate_content_file(path)
        assert any("without avoid_notes" in e for e in errors)

    def test_bad_version(self, tmp_path):
        path = _write_pack(tmp_path, "v.yaml", TEA_PACK.replace('"1.0.0"', "latest"))
        _, errors = validate_content_file(path)
        assert any("doesn't look like a version number" in e for e in errors)

    def test_cross_file_duplicates(self, tmp_path):
        _write_pack(tmp_path, "a.yaml", TEA_PACK)
        _write_pack(tmp_path, "b.yaml", TEA_PACK)
        count, errors = validate_content_directory(tmp_path)
        assert count == 2
        assert any("Duplicate ID 'chamomile'" in e for e in errors)

    def test_empty_directory(self, tmp_path):
        count, errors = validate_content_directory(tmp_path)
        assert count == 0
        assert errors == [f"No content packs found in {tmp_path}"]
