"""Tests for loading, deriving and saving the reading goal profile."""

from datetime import datetime

import pytest

from pagestreak.services.goals import (
    DEFAULT_CURRENT_RATE,
    InvalidProfileError,
    current_daily_goal,
    derive_goal_profile,
    load_goal_profile,
    load_preferences,
    save_goal_profile,
)
from pagestreak.store import StorageReadError


# --- derive_goal_profile ---

def test_derive_profile():
    profile = derive_goal_profile(30, 60, datetime(2025, 3, 14, 9, 30))
    assert profile.weekly_reading_goal_minutes == 210
    assert profile.initial_rate_minutes_per_day == 30
    assert profile.current_rate_minutes_per_day == 30
    assert profile.end_rate_goal_minutes_per_day == 60
    assert profile.end_rate_goal_date == datetime(2025, 12, 31)
    assert profile.current_rate_last_updated == datetime(2025, 3, 14, 9, 30)
    assert profile.weekly_rate_increase_minutes == 1
    assert profile.weekly_rate_increase_percentage == pytest.approx(3.333, abs=1e-3)


def test_derive_profile_rounds_weekly_increase_up():
    profile = derive_goal_profile(10, 120, datetime(2025, 1, 1))
    # 110 / 52 = 2.1
    assert profile.weekly_rate_increase_minutes == 3
    assert profile.weekly_rate_increase_percentage == pytest.approx(30.0)


def test_derive_profile_end_below_initial():
    profile = derive_goal_profile(45, 20, datetime(2025, 1, 1))
    assert profile.weekly_rate_increase_minutes == 0
    assert profile.weekly_rate_increase_percentage == 0


# --- load_goal_profile ---

@pytest.mark.asyncio
async def test_load_missing_profile(store):
    assert await load_goal_profile(store) is None


@pytest.mark.asyncio
async def test_load_applies_defaults(store):
    await store.execute(
        "INSERT INTO user_preferences (id, username, created_at, updated_at) "
        "VALUES (1, 'Reader', '2025-01-01 00:00:00', '2025-01-01 00:00:00')"
    )
    profile = await load_goal_profile(store)
    assert profile.weekly_reading_goal_minutes == 210
    assert profile.initial_rate_minutes_per_day == 30
    assert profile.end_rate_goal_minutes_per_day == 60
    assert profile.current_rate_minutes_per_day == 30
    assert profile.weekly_rate_increase_minutes == 1
    assert profile.weekly_rate_increase_percentage == 3.33
    assert profile.end_rate_goal_date is None
    assert profile.current_rate_last_updated is None

    # defaults are never written back
    row = await load_preferences(store)
    assert row["current_reading_rate_minutes_per_day"] is None


@pytest.mark.asyncio
async def test_load_keeps_stored_values(store):
    await store.execute(
        "INSERT INTO user_preferences (id, username, created_at, updated_at, "
        "current_reading_rate_minutes_per_day, end_reading_rate_goal_date) "
        "VALUES (1, 'Reader', '2025-01-01 00:00:00', '2025-01-01 00:00:00', 42, '2025-12-31T00:00:00Z')"
    )
    profile = await load_goal_profile(store)
    assert profile.current_rate_minutes_per_day == 42
    assert profile.end_rate_goal_date == datetime(2025, 12, 31)


@pytest.mark.asyncio
async def test_load_rejects_bad_timestamp(store):
    await store.execute(
        "INSERT INTO user_preferences (id, username, created_at, updated_at, current_reading_rate_last_updated) "
        "VALUES (1, 'Reader', '2025-01-01 00:00:00', '2025-01-01 00:00:00', 'last tuesday')"
    )
    with pytest.raises(InvalidProfileError):
        await load_goal_profile(store)


# --- save_goal_profile ---

@pytest.mark.asyncio
async def test_save_and_load_round_trip(store):
    profile = derive_goal_profile(25, 50, datetime(2025, 2, 1))
    await save_goal_profile(store, profile, username="Ada", yearly_book_goal=20, preferred_genres=["sci-fi", "history"])
    assert await load_goal_profile(store) == profile

    row = await load_preferences(store)
    assert row["username"] == "Ada"
    assert row["yearly_book_goal"] == 20
    assert row["preferred_genres"] == "sci-fi,history"


@pytest.mark.asyncio
async def test_save_overwrites_singleton(store):
    await save_goal_profile(store, derive_goal_profile(30, 60, datetime(2025, 1, 1)))
    await store.execute("UPDATE user_preferences SET current_reading_rate_minutes_per_day = 41 WHERE id = 1")

    edited = derive_goal_profile(20, 40, datetime(2025, 6, 1))
    await save_goal_profile(store, edited, username="Reader")

    rows = await store.query_all("SELECT id FROM user_preferences")
    assert len(rows) == 1
    profile = await load_goal_profile(store)
    assert profile.current_rate_minutes_per_day == 20
    assert profile.current_rate_last_updated == datetime(2025, 6, 1)


# --- current_daily_goal ---

@pytest.mark.asyncio
async def test_current_daily_goal_default(store):
    assert await current_daily_goal(store) == DEFAULT_CURRENT_RATE


@pytest.mark.asyncio
async def test_current_daily_goal_from_profile(store):
    await save_goal_profile(store, derive_goal_profile(45, 90, datetime(2025, 1, 1)))
    assert await current_daily_goal(store) == 45


@pytest.mark.asyncio
async def test_current_daily_goal_read_failure(store, monkeypatch, caplog):
    await save_goal_profile(store, derive_goal_profile(45, 90, datetime(2025, 1, 1)))

    async def broken(*args, **kwargs):
        raise StorageReadError("database is locked")

    monkeypatch.setattr(store, "query_first", broken)
    assert await current_daily_goal(store) == DEFAULT_CURRENT_RATE
    assert "could not read profile" in caplog.text
