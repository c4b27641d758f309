"""MCP tools for the terrain quiz, classification and pulse drift checks."""

from __future__ import annotations

import dataclasses
import json
import logging

from fastmcp import Context, FastMCP

from terrain.domains.wellness.domain_logic.classifier import classify_answers
from terrain.domains.wellness.domain_logic.drift_detector import (
    PULSE_QUESTIONS,
    detect_drift,
    representative_answers,
)
from terrain.domains.wellness.domain_logic.quiz_tables import QUESTIONS_BY_ID, QUIZ_QUESTIONS
from terrain.domains.wellness.domain_logic.suggestion_models import GOALS, TAGS
from terrain.domains.wellness.domain_logic.terrain_models import AXES, Vector
from terrain.domains.wellness.stores import (
    ALCOHOL_FREQUENCIES,
    SMOKING_STATUSES,
    ProfileStore,
    TerrainProfile,
)
from terrain.domains.wellness.tools.context import (
    InvalidInput,
    check_vocabulary,
    invalid_input,
    resolve_terrain,
)

logger = logging.getLogger(__name__)


def register_terrain_tools(mcp: FastMCP, profile_store: ProfileStore) -> None:
    """Register quiz, classification and drift tools on the MCP server."""

    @mcp.tool
    async def terrain_quiz_questions(ctx: Context) -> str:
        """List the terrain quiz: twelve questions with their answer options."""
        return json.dumps({
            "status": "ok",
            "questions": [q.to_dict() for q in QUIZ_QUESTIONS],
        })

    @mcp.tool
    async def classify_terrain(
        ctx: Context,
        answers: dict[str, str],
        save: bool = True,
    ) -> str:
        """Classify quiz answers into a terrain type and modifier.

        Args:
            answers: Mapping of question id to chosen option id
                (e.g., {"q1_run_temp": "always_cold"}).
            save: Store the result as the current terrain profile, keeping any
                saved goals and preferences.
        """
        # Unknown question or option ids are skipped and listed in the response.
        ignored = sorted(
            qid for qid, oid in answers.items()
            if qid not in QUESTIONS_BY_ID or QUESTIONS_BY_ID[qid].option(oid) is None
        )
        if ignored:
            logger.info("Ignoring unknown quiz answers for: %s", ", ".join(ignored))

        # Quiz order, not caller order, so weighting is deterministic.
        ordered = [(q.id, answers[q.id]) for q in QUIZ_QUESTIONS if q.id in answers]
        result = classify_answers(ordered)

        if save:
            existing = profile_store.get_profile()
            if existing is None:
                profile = TerrainProfile(terrain_type=result.primary_type, modifier=result.modifier)
            else:
                profile = dataclasses.replace(
                    existing, terrain_type=result.primary_type, modifier=result.modifier
                )
            profile_store.save_profile(profile)
            logger.info("Terrain profile saved: %s/%s", result.primary_type, result.modifier)

        return json.dumps({
            "status": "ok",
            "answered": len(answers) - len(ignored),
            "ignored": ignored,
            "saved": save,
            **result.to_dict(),
        })

    @mcp.tool
    async def terrain_pulse_questions(ctx: Context) -> str:
        """List the five pulse-check questions used to detect terrain drift."""
        return json.dumps({
            "status": "ok",
            "questions": [q.to_dict() for q in PULSE_QUESTIONS],
        })

    @mcp.tool
    async def detect_terrain_drift(
        ctx: Context,
        answers: dict[str, int],
        current_type_id: str = "",
        current_modifier_id: str = "",
    ) -> str:
        """Compare pulse-check answers against the saved (or given) terrain.

        Args:
            answers: Mapping of pulse question id (1-5) to option id (1-15).
            current_type_id: Terrain type to compare against. Defaults to the
                saved profile.
            current_modifier_id: Modifier to compare against. Defaults to the
                saved profile.
        """
        try:
            parsed = {int(qid): int(oid) for qid, oid in answers.items()}
        except (TypeError, ValueError):
            return invalid_input("Pulse answers must map integer question ids to integer option ids")

        if current_type_id:
            # Stored ids from older profiles may be unknown; the detector defaults them.
            current_type, current_modifier = current_type_id, current_modifier_id or None
        else:
            try:
                current_type, current_modifier = resolve_terrain(profile_store)
            except InvalidInput as exc:
                return exc.to_json()

        result = detect_drift(parsed, current_type, current_modifier)
        return json.dumps({"status": "ok", **result.to_dict()})

    @mcp.tool
    async def pulse_baseline_answers(ctx: Context, vector: dict[str, int]) -> str:
        """Pulse answers that best represent a stored quiz vector.

        Args:
            vector: Axis scores, e.g. {"cold_heat": -5, "def_excess": -5}.
        """
        unknown = sorted(set(vector) - set(AXES))
        if unknown:
            return invalid_input(f"Unknown axes: {', '.join(unknown)}", valid=AXES)
        answers = representative_answers(Vector(**vector))
        return json.dumps({"status": "ok", "answers": {str(k): v for k, v in answers.items()}})

    @mcp.tool
    async def terrain_profile(
        ctx: Context,
        goals: list[str] | None = None,
        avoid_tags: list[str] | None = None,
        cabinet_ids: list[str] | None = None,
        alcohol_frequency: str = "",
        smoking_status: str = "",
    ) -> str:
        """Show the saved terrain profile, updating any preference that is passed.

        Args:
            goals: Wellness goals (sleep, digestion, energy, stress, skin, menstrual_comfort).
            avoid_tags: Tags to steer suggestions away from.
            cabinet_ids: Ingredient ids the user has on hand.
            alcohol_frequency: never, occasional, weekly or daily.
            smoking_status: never, former, occasional or regular.
        """
        profile = profile_store.get_profile()
        if profile is None:
            return invalid_input("No terrain profile saved; run classify_terrain first")

        try:
            check_vocabulary("goals", goals or [], GOALS)
            check_vocabulary("tags", avoid_tags or [], TAGS)
            if alcohol_frequency:
                check_vocabulary("alcohol frequency", [alcohol_frequency], ALCOHOL_FREQUENCIES)
            if smoking_status:
                check_vocabulary("smoking status", [smoking_status], SMOKING_STATUSES)
        except InvalidInput as exc:
            return exc.to_json()

        changes: dict = {}
        if goals is not None:
            changes["goals"] = frozenset(goals)
        if avoid_tags is not None:
            changes["avoid_tags"] = frozenset(avoid_tags)
        if cabinet_ids is not None:
            changes["cabinet_ids"] = frozenset(cabinet_ids)
        if alcohol_frequency:
            changes["alcohol_frequency"] = alcohol_frequency
        if smoking_status:
            changes["smoking_status"] = smoking_status
        if changes:
            profile = dataclasses.replace(profile, **changes)
            profile_store.save_profile(profile)
            logger.info("Terrain profile preferences updated: %s", sorted(changes))

        return json.dumps({"status": "ok", "updated": sorted(changes), "profile": profile.to_dict()})
