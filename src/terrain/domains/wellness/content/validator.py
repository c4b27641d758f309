"""Content pack validator — checks entries against the known vocabularies."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from terrain.domains.wellness.content.loader import CatalogError, load_content_file
from terrain.domains.wellness.domain_logic.suggestion_models import GOALS, SEASONS, TAGS, Candidate
from terrain.domains.wellness.domain_logic.terrain_models import TERRAIN_TYPES

logger = logging.getLogger(__name__)


def validate_candidate(candidate: Candidate, display_path: str) -> list[str]:
    """Vocabulary errors for one candidate."""
    errors: list[str] = []
    prefix = f"{display_path}: {candidate.id!r}"

    for tag in sorted(candidate.tags - set(TAGS)):
        errors.append(f"{prefix} has unknown tag '{tag}'")
    for goal in sorted(candidate.goals - set(GOALS)):
        errors.append(f"{prefix} has unknown goal '{goal}'")
    for season in sorted(candidate.seasons - set(SEASONS)):
        errors.append(f"{prefix} has unknown season '{season}'")
    for terrain_id in sorted(candidate.terrain_fit - set(TERRAIN_TYPES)):
        errors.append(f"{prefix} has unknown terrain id '{terrain_id}'")

    if not candidate.tags:
        errors.append(f"{prefix} has no tags")
    if candidate.avoid_for_hours and not candidate.avoid_notes:
        errors.append(f"{prefix} sets avoid_for_hours without avoid_notes")
    return errors


def validate_content_file(
    path: Path, *, project_root: Path | None = None
) -> tuple[list[Candidate], list[str]]:
    """Validate a single pack file.

    Returns: (candidates, errors)
    """
    display_path = str(path)
    if project_root:
        try:
            display_path = str(path.relative_to(project_root))
        except ValueError:
            pass

    try:
        candidates = load_content_file(path)
    except (CatalogError, OSError, yaml.YAMLError) as exc:
        return [], [f"{display_path}: Failed to load: {exc}"]

    errors: list[str] = []
    for candidate in candidates:
        errors.extend(validate_candidate(candidate, display_path))

    with open(path) as f:
        version = str((yaml.safe_load(f) or {}).get("version", ""))
    if not version or not all(c.isdigit() or c == "." for c in version):
        errors.append(f"{display_path}: Version '{version}' doesn't look like a version number")

    return candidates, errors


def validate_content_directory(
    directory: str | Path, *, project_root: Path | None = None
) -> tuple[int, list[str]]:
    """Validate every pack in a directory, including cross-file duplicate ids.

    Returns: (candidate_count, errors)
    """
    directory = Path(directory)
    if not directory.is_dir():
        return 0, [f"Content directory not found: {directory}"]

    yaml_files = sorted(p for p in directory.rglob("*.yaml") if not p.name.startswith("_"))
    if not yaml_files:
        return 0, [f"No content packs found in {directory}"]

    errors: list[str] = []
    seen_ids: dict[str, Path] = {}
    loaded = 0

    for path in yaml_files:
        candidates, file_errors = validate_content_file(path, project_root=project_root)
        errors.extend(file_errors)
        for candidate in candidates:
            loaded += 1
            if candidate.id in seen_ids:
                errors.append(
                    f"{path.name}: Duplicate ID '{candidate.id}' already defined in "
                    f"{seen_ids[candidate.id].name}"
                )
            else:
                seen_ids[candidate.id] = path

    for err in errors:
        logger.debug("%s", err)
    return loaded, errors
