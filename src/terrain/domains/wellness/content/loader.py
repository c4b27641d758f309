"""Content loader — reads ingredient and routine packs from YAML."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from terrain.domains.wellness.content.registry import ContentRegistry
from terrain.domains.wellness.domain_logic.suggestion_models import Candidate

logger = logging.getLogger(__name__)

# Packs bundled with the package.
DEFAULT_PACK_DIR = Path(__file__).resolve().parent / "packs"

KINDS = ("ingredient", "routine")


class CatalogError(Exception):
    """A content pack could not be read."""


class CatalogValidationError(CatalogError):
    """A content pack entry is malformed."""


def load_content_directory(directory: str | Path, registry: ContentRegistry) -> int:
    """Load every YAML pack in a directory (recursively) into the registry.

    Returns the number of candidates registered. Files starting with an
    underscore are skipped; a file that fails to load is logged and skipped
    without affecting the others.
    """
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("Content directory does not exist: %s", directory)
        return 0

    count = 0
    for path in sorted(directory.rglob("*.yaml")):
        if path.name.startswith("_"):
            continue
        try:
            candidates = load_content_file(path)
            for candidate in candidates:
                registry.register(candidate)
            count += len(candidates)
            logger.info("Loaded content pack: %s (%d items)", path.name, len(candidates))
        except Exception:
            logger.exception("Failed to load content pack from %s", path)
    return count


def load_content_file(path: Path) -> list[Candidate]:
    """Parse one YAML pack into candidates.

    Raises CatalogError when the file is not a mapping and
    CatalogValidationError when an entry is missing required fields.
    """
    with open(path) as f:
        data: Any = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise CatalogError(f"{path.name}: expected a mapping at the top level")

    kind = data.get("kind")
    if kind not in KINDS:
        raise CatalogValidationError(f"{path.name}: unknown pack kind {kind!r}")

    items = data.get("items") or []
    if not isinstance(items, list):
        raise CatalogValidationError(f"{path.name}: 'items' must be a list")

    return [candidate_from_dict(entry, kind, source=path.name) for entry in items]


def _string_set(entry: dict, key: str, source: str) -> frozenset[str]:
    value = entry.get(key) or []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise CatalogValidationError(f"{source}: {entry.get('id')!r} field '{key}' must be a list of strings")
    return frozenset(value)


def candidate_from_dict(entry: Any, kind: str, *, source: str = "<memory>") -> Candidate:
    """Build a Candidate from one pack entry."""
    if not isinstance(entry, dict):
        raise CatalogValidationError(f"{source}: pack entries must be mappings")
    for required in ("id", "display_name"):
        if not entry.get(required):
            raise CatalogValidationError(f"{source}: entry missing required field '{required}'")

    avoid_hours = entry.get("avoid_for_hours", 0) or 0
    if not isinstance(avoid_hours, int) or avoid_hours < 0:
        raise CatalogValidationError(
            f"{source}: {entry['id']!r} avoid_for_hours must be a non-negative integer"
        )

    return Candidate(
        id=str(entry["id"]),
        display_name=str(entry["display_name"]),
        kind=kind,
        tags=_string_set(entry, "tags", source),
        goals=_string_set(entry, "goals", source),
        seasons=_string_set(entry, "seasons", source),
        terrain_fit=_string_set(entry, "terrain_fit", source),
        avoid_for_hours=avoid_hours,
        avoid_notes=entry.get("avoid_notes"),
        description=str(entry.get("description", "")).strip(),
    )
