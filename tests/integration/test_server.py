"""Integration tests for the Terrain MCP server."""

from __future__ import annotations

import asyncio
import json
from datetime import date, timedelta

import pytest
from fastmcp import Client

from terrain.core.server.app import create_app


def _run(coro):
    """Run an async coroutine synchronously (no pytest-asyncio required)."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def _payload(result) -> dict:
    """Decode the JSON text a tool returned."""
    blocks = getattr(result, "content", result)
    return json.loads(blocks[0].text)


ALL_EXPECTED_TOOLS = [
    "health_check",
    "terrain_quiz_questions",
    "classify_terrain",
    "terrain_pulse_questions",
    "detect_terrain_drift",
    "pulse_baseline_answers",
    "terrain_profile",
    "suggest_quick_fix",
    "ordered_needs",
    "record_daily_log",
    "terrain_trends",
    "healthy_zone",
    "terrain_pulse_insight",
    "daily_log_drift",
    "routine_effectiveness",
    "home_insights",
    "why_for_you",
]

COLD_DEFICIENT_ANSWERS = {
    "q1_run_temp": "always_cold",
    "q3_sweat_night": "hardly_sweat",
    "q4_energy_pattern": "low_all_day",
}

TODAY = date(2026, 3, 15)


@pytest.fixture
def client(log_store, profile_store):
    """MCP client on a fresh server with empty in-memory stores."""
    mcp = create_app(log_store_override=log_store, profile_store_override=profile_store)
    return Client(mcp)


@pytest.fixture
def profiled_client(log_store, saved_profile_store):
    """MCP client on a server that already holds a Low Flame profile."""
    mcp = create_app(log_store_override=log_store, profile_store_override=saved_profile_store)
    return Client(mcp)


def test_server_starts_and_lists_tools(client):
    """Server should start and expose all registered tools."""
    async def _check():
        async with client:
            tools = await client.list_tools()
            tool_names = [t.name for t in tools]
            for expected in ALL_EXPECTED_TOOLS:
                assert expected in tool_names, f"Missing tool: {expected}"
    _run(_check())


def test_health_check_returns_ok(client):
    """health_check reports the bundled catalog and empty stores."""
    async def _check():
        async with client:
            data = _payload(await client.call_tool("health_check", {}))
            assert data["status"] == "ok"
            assert data["ingredients_loaded"] == 16
            assert data["routines_loaded"] == 11
            assert data["logs_stored"] == 0
            assert data["profile_saved"] is False
            assert data["trend_window_days"] == 14
    _run(_check())


def test_classify_then_home_insights(client, profile_store):
    """Classifying saves the profile that home_insights then reads."""
    async def _check():
        async with client:
            classified = _payload(await client.call_tool(
                "classify_terrain", {"answers": COLD_DEFICIENT_ANSWERS}
            ))
            assert classified["terrain_type_id"] == "cold_deficient_low_flame"
            assert classified["nickname"] == "Low Flame"

            insights = _payload(await client.call_tool(
                "home_insights", {"today": TODAY.isoformat()}
            ))
            assert insights["headline"]["wisdom"] == "Kindle gently."
            assert insights["daily_tone"]["label"] == "Low Flame Day"
    _run(_check())
    assert profile_store.get_profile().terrain_type == "cold_deficient_low_flame"


def test_classify_ignores_unknown_questions_and_options(client):
    """Answers from a newer quiz version are skipped, not rejected."""
    async def _check():
        async with client:
            data = _payload(await client.call_tool("classify_terrain", {"answers": {
                **COLD_DEFICIENT_ANSWERS,
                "q99_future": "x",
                "q3_sweat_night": "new_option_v2",
            }}))
            assert data["status"] == "ok"
            assert data["ignored"] == ["q3_sweat_night", "q99_future"]
            assert data["answered"] == 2
            assert data["terrain_type_id"] == "cold_deficient_low_flame"
    _run(_check())


def test_home_insights_without_profile_is_invalid(client):
    async def _check():
        async with client:
            data = _payload(await client.call_tool("home_insights", {}))
            assert data["status"] == "invalid_input"
            assert "classify_terrain" in data["message"]
    _run(_check())


def test_home_insights_reads_todays_log(profiled_client):
    """Symptoms in the day's log shape the headline without being passed again."""
    async def _check():
        async with profiled_client:
            await profiled_client.call_tool("record_daily_log", {
                "log": {"date": TODAY.isoformat(), "quick_symptoms": ["stressed"]},
            })
            data = _payload(await profiled_client.call_tool(
                "home_insights", {"today": TODAY.isoformat()}
            ))
            assert data["headline"]["wisdom"] == "Breathe first."
            assert data["headline"]["is_symptom_adjusted"] is True
    _run(_check())


def test_record_logs_then_trends(profiled_client, log_store):
    """A week of stress-free logs followed by stressed days reads as declining stress."""
    async def _check():
        async with profiled_client:
            for days_ago in range(14):
                symptoms = ["stressed"] if days_ago < 7 else []
                day = (TODAY - timedelta(days=days_ago)).isoformat()
                saved = _payload(await profiled_client.call_tool(
                    "record_daily_log", {"log": {"date": day, "quick_symptoms": symptoms}}
                ))
                assert saved["status"] == "saved"

            data = _payload(await profiled_client.call_tool(
                "terrain_trends", {"today": TODAY.isoformat()}
            ))
            assert data["status"] == "ok"
            assert data["annotated"] is True
            by_category = {t["category"]: t for t in data["trends"]}
            assert by_category["stress"]["direction"] == "declining"
            assert len(data["activity"]["routine_minutes"]) == 14
    _run(_check())
    assert log_store.count() == 14


def test_trends_need_three_days(client):
    async def _check():
        async with client:
            data = _payload(await client.call_tool("terrain_trends", {"today": TODAY.isoformat()}))
            assert data["status"] == "insufficient_data"
            assert data["trends"] == []
    _run(_check())


def test_numeric_text_in_logs_keeps_trends_working(profiled_client):
    async def _check():
        async with profiled_client:
            for days_ago in range(7):
                day = (TODAY - timedelta(days=days_ago)).isoformat()
                await profiled_client.call_tool("record_daily_log", {
                    "log": {"date": day, "sleep_duration_minutes": "420", "step_count": "5000"},
                })
            data = _payload(await profiled_client.call_tool(
                "terrain_trends", {"today": TODAY.isoformat()}
            ))
            assert data["status"] == "ok"

            bad = _payload(await profiled_client.call_tool("record_daily_log", {
                "log": {"date": TODAY.isoformat(), "resting_heart_rate": "calm"},
            }))
            assert bad["status"] == "invalid_input"
    _run(_check())


def test_suggest_quick_fix(profiled_client):
    """Low Flame asking for warmth gets a warming catalog item with an explanation."""
    async def _check():
        async with profiled_client:
            data = _payload(await profiled_client.call_tool("suggest_quick_fix", {
                "need": "warmth",
                "time_of_day": "morning",
                "today": TODAY.isoformat(),
            }))
            assert data["status"] == "ok"
            suggestion = data["suggestion"]
            assert suggestion["is_fallback"] is False
            assert suggestion["contributions"]["need_tags"] > 0
            assert data["why_for_you"]
    _run(_check())


def test_suggest_quick_fix_rejects_unknown_need(profiled_client):
    async def _check():
        async with profiled_client:
            data = _payload(await profiled_client.call_tool("suggest_quick_fix", {"need": "teleport"}))
            assert data["status"] == "invalid_input"
            assert "warmth" in data["valid"]
    _run(_check())


def test_detect_drift_against_saved_profile(profiled_client):
    async def _check():
        async with profiled_client:
            stable = _payload(await profiled_client.call_tool("detect_terrain_drift", {
                "answers": {"1": 1, "2": 4, "3": 8, "4": 10, "5": 13},
            }))
            assert stable["recommendation"] == "no_change"

            drifted = _payload(await profiled_client.call_tool("detect_terrain_drift", {
                "answers": {"1": 3, "2": 6},
            }))
            assert drifted["recommendation"] == "significant_drift"
    _run(_check())


def test_terrain_profile_updates_preferences(profiled_client, saved_profile_store):
    async def _check():
        async with profiled_client:
            data = _payload(await profiled_client.call_tool("terrain_profile", {
                "goals": ["sleep"],
                "alcohol_frequency": "weekly",
            }))
            assert data["updated"] == ["alcohol_frequency", "goals"]

            bad = _payload(await profiled_client.call_tool("terrain_profile", {"goals": ["fame"]}))
            assert bad["status"] == "invalid_input"
    _run(_check())
    assert saved_profile_store.get_profile().goals == frozenset({"sleep"})


def test_ordered_needs(client):
    async def _check():
        async with client:
            data = _payload(await client.call_tool("ordered_needs", {"symptoms": ["cold"]}))
            assert data["needs"][0]["id"] == "warmth"
    _run(_check())


def test_home_insights_month_picks_season(profiled_client):
    """A January month adds the winter seasonality reading for a cold terrain."""
    async def _check():
        async with profiled_client:
            data = _payload(await profiled_client.call_tool(
                "home_insights", {"month": 1, "today": TODAY.isoformat()}
            ))
            areas = {a["area"]: a for a in data["life_areas"]}
            assert areas["seasonality"]["focus"] == "priority"

            plain = _payload(await profiled_client.call_tool(
                "home_insights", {"today": TODAY.isoformat()}
            ))
            assert "seasonality" not in {a["area"] for a in plain["life_areas"]}
    _run(_check())
