"""Reading-rate goal profile: load, derive and save the singleton row."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from pagestreak.store import StorageReadError, Store
from pagestreak.time_utils import end_of_year, format_timestamp, parse_timestamp, to_utc_naive, utcnow

logger = logging.getLogger(__name__)

PROFILE_ID = 1

DEFAULT_WEEKLY_READING_GOAL = 210
DEFAULT_INITIAL_RATE = 30
DEFAULT_END_RATE = 60
DEFAULT_CURRENT_RATE = 30
DEFAULT_WEEKLY_INCREASE_MINUTES = 1
DEFAULT_WEEKLY_INCREASE_PERCENTAGE = 3.33

# The total increase is spread over a year of weekly steps
WEEKS_PER_YEAR = 52


class ProgressionError(Exception):
    pass


class InvalidProfileError(ProgressionError):
    pass


@dataclass(frozen=True)
class GoalProfile:
    weekly_reading_goal_minutes: int
    initial_rate_minutes_per_day: int
    end_rate_goal_minutes_per_day: int
    end_rate_goal_date: datetime | None
    current_rate_minutes_per_day: int
    current_rate_last_updated: datetime | None
    weekly_rate_increase_minutes: int
    weekly_rate_increase_percentage: float


_GOAL_COLUMNS = """
    weekly_reading_goal,
    initial_reading_rate_minutes_per_day,
    end_reading_rate_goal_minutes_per_day,
    end_reading_rate_goal_date,
    current_reading_rate_minutes_per_day,
    current_reading_rate_last_updated,
    weekly_reading_rate_increase_minutes,
    weekly_reading_rate_increase_percentage
"""


def _int(row: dict, column: str, default: int) -> int:
    value = row.get(column)
    if value is None:
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        raise InvalidProfileError(f"{column} is not numeric: {value!r}") from None


def _float(row: dict, column: str, default: float) -> float:
    value = row.get(column)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidProfileError(f"{column} is not numeric: {value!r}") from None


def _timestamp(row: dict, column: str) -> datetime | None:
    value = row.get(column)
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError):
        raise InvalidProfileError(f"{column} is not a timestamp: {value!r}") from None


def profile_from_row(row: dict) -> GoalProfile:
    """Build a GoalProfile from a preferences row, filling NULL columns with defaults."""
    return GoalProfile(
        weekly_reading_goal_minutes=_int(row, "weekly_reading_goal", DEFAULT_WEEKLY_READING_GOAL),
        initial_rate_minutes_per_day=_int(row, "initial_reading_rate_minutes_per_day", DEFAULT_INITIAL_RATE),
        end_rate_goal_minutes_per_day=_int(row, "end_reading_rate_goal_minutes_per_day", DEFAULT_END_RATE),
        end_rate_goal_date=_timestamp(row, "end_reading_rate_goal_date"),
        current_rate_minutes_per_day=_int(row, "current_reading_rate_minutes_per_day", DEFAULT_CURRENT_RATE),
        current_rate_last_updated=_timestamp(row, "current_reading_rate_last_updated"),
        weekly_rate_increase_minutes=_int(
            row, "weekly_reading_rate_increase_minutes", DEFAULT_WEEKLY_INCREASE_MINUTES
        ),
        weekly_rate_increase_percentage=_float(
            row, "weekly_reading_rate_increase_percentage", DEFAULT_WEEKLY_INCREASE_PERCENTAGE
        ),
    )


async def load_goal_profile(store: Store) -> GoalProfile | None:
    """Read the goal profile. None means onboarding has not happened yet."""
    row = await store.query_first(
        f"SELECT {_GOAL_COLUMNS} FROM user_preferences WHERE id = :id",
        {"id": PROFILE_ID},
    )
    if row is None:
        return None
    return profile_from_row(row)


async def load_preferences(store: Store) -> dict | None:
    return await store.query_first(
        "SELECT * FROM user_preferences WHERE id = :id",
        {"id": PROFILE_ID},
    )


def derive_goal_profile(initial_rate: int, end_rate: int, now: datetime) -> GoalProfile:
    """Goal profile for a fresh onboarding or a profile edit.

    The target date is the end of the current year and the current rate
    restarts at the initial rate.
    """
    now = to_utc_naive(now)
    total_increase = end_rate - initial_rate
    weekly_increase = math.ceil(total_increase / WEEKS_PER_YEAR) if total_increase > 0 else 0
    if initial_rate > 0:
        percentage = weekly_increase / initial_rate * 100
    else:
        percentage = DEFAULT_WEEKLY_INCREASE_PERCENTAGE
    return GoalProfile(
        weekly_reading_goal_minutes=initial_rate * 7,
        initial_rate_minutes_per_day=initial_rate,
        end_rate_goal_minutes_per_day=end_rate,
        end_rate_goal_date=end_of_year(now),
        current_rate_minutes_per_day=initial_rate,
        current_rate_last_updated=now,
        weekly_rate_increase_minutes=weekly_increase,
        weekly_rate_increase_percentage=percentage,
    )


def _optional_timestamp(value: datetime | None) -> str | None:
    return format_timestamp(value) if value is not None else None


async def save_goal_profile(
    store: Store,
    profile: GoalProfile,
    username: str = "Reader",
    yearly_book_goal: int = 12,
    preferred_genres: list[str] | None = None,
) -> None:
    """Insert or overwrite the singleton profile row."""
    now = format_timestamp(profile.current_rate_last_updated or utcnow())
    await store.execute(
        """
        INSERT INTO user_preferences (
            id, username, yearly_book_goal, preferred_genres,
            weekly_reading_goal,
            initial_reading_rate_minutes_per_day, end_reading_rate_goal_minutes_per_day,
            end_reading_rate_goal_date, current_reading_rate_minutes_per_day,
            current_reading_rate_last_updated, weekly_reading_rate_increase_minutes,
            weekly_reading_rate_increase_percentage, created_at, updated_at
        ) VALUES (
            :id, :username, :yearly_book_goal, :preferred_genres,
            :weekly_goal, :initial_rate, :end_rate, :end_date, :current_rate,
            :last_updated, :increase_minutes, :increase_percentage, :now, :now
        )
        ON CONFLICT(id) DO UPDATE SET
            username = excluded.username,
            yearly_book_goal = excluded.yearly_book_goal,
            preferred_genres = excluded.preferred_genres,
            weekly_reading_goal = excluded.weekly_reading_goal,
            initial_reading_rate_minutes_per_day = excluded.initial_reading_rate_minutes_per_day,
            end_reading_rate_goal_minutes_per_day = excluded.end_reading_rate_goal_minutes_per_day,
            end_reading_rate_goal_date = excluded.end_reading_rate_goal_date,
            current_reading_rate_minutes_per_day = excluded.current_reading_rate_minutes_per_day,
            current_reading_rate_last_updated = excluded.current_reading_rate_last_updated,
            weekly_reading_rate_increase_minutes = excluded.weekly_reading_rate_increase_minutes,
            weekly_reading_rate_increase_percentage = excluded.weekly_reading_rate_increase_percentage,
            updated_at = excluded.updated_at
        """,
        {
            "id": PROFILE_ID,
            "username": username,
            "yearly_book_goal": yearly_book_goal,
            "preferred_genres": ",".join(preferred_genres or []),
            "weekly_goal": profile.weekly_reading_goal_minutes,
            "initial_rate": profile.initial_rate_minutes_per_day,
            "end_rate": profile.end_rate_goal_minutes_per_day,
            "end_date": _optional_timestamp(profile.end_rate_goal_date),
            "current_rate": profile.current_rate_minutes_per_day,
            "last_updated": _optional_timestamp(profile.current_rate_last_updated),
            "increase_minutes": profile.weekly_rate_increase_minutes,
            "increase_percentage": profile.weekly_rate_increase_percentage,
            "now": now,
        },
    )
    logger.info(
        "Saved reading goal: %d -> %d min/day by %s",
        profile.initial_rate_minutes_per_day,
        profile.end_rate_goal_minutes_per_day,
        profile.end_rate_goal_date,
    )


async def current_daily_goal(store: Store) -> int:
    """Daily minutes to hit today; the default rate before onboarding."""
    try:
        profile = await load_goal_profile(store)
    except InvalidProfileError as e:
        logger.warning("Using default daily goal, profile data is invalid: %s", e)
        return DEFAULT_CURRENT_RATE
    except StorageReadError as e:
        logger.error("Using default daily goal, could not read profile: %s", e)
        return DEFAULT_CURRENT_RATE
    if profile is None:
        return DEFAULT_CURRENT_RATE
    return profile.current_rate_minutes_per_day
