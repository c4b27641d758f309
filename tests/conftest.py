"""Shared test fixtures for Terrain tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TERRAIN_HOST",
        "TERRAIN_PORT",
        "TERRAIN_LOG_LEVEL",
        "TERRAIN_ALLOW_INSECURE_BIND",
        "CONTENT_DIR",
        "TREND_WINDOW_DAYS",
    ):
        monkeypatch.delenv(name, raising=False)

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from terrain.domains.wellness.content.loader import (  # noqa: E402
    DEFAULT_PACK_DIR,
    load_content_directory,
)
from terrain.domains.wellness.content.registry import ContentRegistry  # noqa: E402
from terrain.domains.wellness.stores import TerrainProfile  # noqa: E402
from terrain.domains.wellness.stores.memory import (  # noqa: E402
    InMemoryDailyLogStore,
    InMemoryProfileStore,
)

# ---------------------------------------------------------------------------
# Content and stores
# ---------------------------------------------------------------------------

@pytest.fixture
def content_registry() -> ContentRegistry:
    """Registry loaded with the bundled ingredient and routine packs."""
    registry = ContentRegistry()
    load_content_directory(DEFAULT_PACK_DIR, registry)
    return registry


@pytest.fixture
def log_store() -> InMemoryDailyLogStore:
    return InMemoryDailyLogStore()


@pytest.fixture
def profile_store() -> InMemoryProfileStore:
    """Profile store with no saved profile."""
    return InMemoryProfileStore()


@pytest.fixture
def saved_profile_store() -> InMemoryProfileStore:
    """Profile store holding a Cold + Deficient profile with no modifier."""
    return InMemoryProfileStore(TerrainProfile(terrain_type="cold_deficient_low_flame"))
