"""Content registry — in-memory index of loaded ingredients and routines."""

from __future__ import annotations

import logging

from terrain.domains.wellness.domain_logic.suggestion_models import Candidate

logger = logging.getLogger(__name__)


class ContentRegistry:
    """In-memory registry of catalog candidates, indexed by id, kind and tag."""

    def __init__(self) -> None:
        self._candidates: dict[str, Candidate] = {}
        self._by_kind: dict[str, list[str]] = {}
        self._by_tag: dict[str, list[str]] = {}

    def register(self, candidate: Candidate) -> None:
        """Add a candidate to all indexes."""
        if candidate.id in self._candidates:
            raise ValueError(f"Duplicate content id registered: {candidate.id!r}")
        self._candidates[candidate.id] = candidate

        self._by_kind.setdefault(candidate.kind, []).append(candidate.id)
        for tag in sorted(candidate.tags):
            self._by_tag.setdefault(tag, []).append(candidate.id)

    def get(self, candidate_id: str) -> Candidate | None:
        return self._candidates.get(candidate_id)

    def find_by_kind(self, kind: str) -> list[Candidate]:
        """Candidates of one kind, in registration order."""
        return [self._candidates[cid] for cid in self._by_kind.get(kind, [])]

    def find_by_tag(self, tag: str) -> list[Candidate]:
        return [self._candidates[cid] for cid in self._by_tag.get(tag, [])]

    @property
    def ingredients(self) -> list[Candidate]:
        return self.find_by_kind("ingredient")

    @property
    def routines(self) -> list[Candidate]:
        return self.find_by_kind("routine")

    def all(self) -> list[Candidate]:
        """Return all registered candidates."""
        return list(self._candidates.values())

    def __len__(self) -> int:
        return len(self._candidates)
