"""Tests for MCP tools. Each test gets a PagestreakClient backed by the
test httpx client fixture, seeds data via the API, then calls the tool
function directly."""

from datetime import date

import pytest
from pagestreak.mcp.client import PagestreakClient
from pagestreak.mcp.tools.goals import reading_goal, weekly_summary
from pagestreak.mcp.tools.library import add_book, update_book_status
from pagestreak.mcp.tools.reading import log_reading, reading_history


@pytest.fixture
def ps(client):
    return PagestreakClient(client)


# --- add_book ---

@pytest.mark.asyncio
async def test_add_book(ps):
    result = await add_book(ps, title="Dune", author="Frank Herbert", page_count=412)
    assert result["title"] == "Dune"
    assert result["page_count"] == 412
    assert result["reading_status"] == "want_to_read"


@pytest.mark.asyncio
async def test_add_book_with_status(ps):
    result = await add_book(ps, title="Dune", author="Frank Herbert", status="currently_reading")
    assert result["reading_status"] == "currently_reading"
    assert result["date_started"] is not None


@pytest.mark.asyncio
async def test_add_book_duplicate(ps):
    await add_book(ps, title="Dune", author="Frank Herbert")
    result = await add_book(ps, title="Dune", author="Frank Herbert")
    assert result["error"] is True
    assert result["status"] == 409


# --- update_book_status ---

@pytest.mark.asyncio
async def test_update_book_status(ps):
    await add_book(ps, title="Dune", author="Frank Herbert", page_count=412)
    result = await update_book_status(ps, title="Dune", author="Frank Herbert", status="read")
    assert result["reading_status"] == "read"
    assert result["current_page"] == 412
    assert result["date_finished"] is not None


@pytest.mark.asyncio
async def test_update_book_status_unknown_book(ps):
    result = await update_book_status(ps, title="Nope", author="Nobody", status="read")
    assert result["error"] is True
    assert result["status"] == 404


# --- log_reading / reading_history ---

@pytest.mark.asyncio
async def test_log_reading(ps):
    await add_book(ps, title="Dune", author="Frank Herbert", page_count=400)
    result = await log_reading(
        ps, title="Dune", author="Frank Herbert", minutes=30,
        pages_read=20, session_date="2025-01-06", notes="Arrakis",
    )
    assert result["minutes_read"] == 30
    assert result["pages_read"] == 20
    assert result["date"] == "2025-01-06"


@pytest.mark.asyncio
async def test_log_reading_unknown_book(ps):
    result = await log_reading(ps, title="Nope", author="Nobody", minutes=30)
    assert result["error"] is True
    assert result["status"] == 404


@pytest.mark.asyncio
async def test_reading_history(ps):
    await add_book(ps, title="Dune", author="Frank Herbert", page_count=400)
    await log_reading(ps, title="Dune", author="Frank Herbert", minutes=30, pages_read=20, session_date="2025-01-06")
    await log_reading(ps, title="Dune", author="Frank Herbert", minutes=45, pages_read=80, session_date="2025-01-07")

    result = await reading_history(ps, title="Dune", author="Frank Herbert")
    assert len(result["sessions"]) == 2
    assert result["total_minutes"] == 75
    assert result["progress"]["pages_read"] == 100
    assert result["progress"]["percentage"] == 25
    assert result["progress"]["source"] == "sessions"


@pytest.mark.asyncio
async def test_reading_history_unknown_book(ps):
    result = await reading_history(ps, title="Nope", author="Nobody")
    assert result["error"] is True


# --- reading_goal ---

@pytest.mark.asyncio
async def test_reading_goal_without_profile(ps):
    result = await reading_goal(ps)
    assert result["error"] is True
    assert result["status"] == 404


@pytest.mark.asyncio
async def test_reading_goal(ps):
    await ps.put("/api/profile", json={"initial_rate_minutes_per_day": 20, "end_rate_goal_minutes_per_day": 40})
    await add_book(ps, title="Dune", author="Frank Herbert")
    await log_reading(ps, title="Dune", author="Frank Herbert", minutes=25, session_date=date.today().isoformat())

    result = await reading_goal(ps)
    assert result["daily_goal_minutes"] == 20
    assert result["end_goal_minutes"] == 40
    assert result["read_today"] == 25
    assert result["goal_met_today"] is True
    assert result["latest_checkpoint"] is None


# --- weekly_summary ---

@pytest.mark.asyncio
async def test_weekly_summary(ps):
    await add_book(ps, title="Dune", author="Frank Herbert")
    await log_reading(ps, title="Dune", author="Frank Herbert", minutes=40, session_date="2025-01-08")

    result = await weekly_summary(ps, week_start="2025-01-08")
    assert result["week_start"] == "2025-01-06"
    assert result["total_minutes"] == 40
    assert result["top_book"]["title"] == "Dune"
