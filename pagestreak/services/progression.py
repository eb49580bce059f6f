"""Weekly advancement of the daily reading-rate goal.

On each app start the current daily rate moves one step toward the end goal
for every run in which at least a full week has passed since the last change:

    new = current * (1 + pct / 100), capped at the end goal,
    but always at least current + 1

The profile keeps the rounded rate; the latest ``weekly_progress`` row keeps
the unrounded value. The very first due advancement only seeds that row with
the starting rate. Nothing advances once the goal date has passed.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime

from pagestreak.services.goals import (
    PROFILE_ID,
    GoalProfile,
    InvalidProfileError,
    load_goal_profile,
)
from pagestreak.store import StorageReadError, StorageWriteError, Store
from pagestreak.time_utils import format_timestamp, parse_timestamp, to_utc_naive, utcnow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeeklyProgressCheckpoint:
    id: int
    weeks_passed: int
    target_reading_minutes: int
    achieved_reading_minutes: float
    date_created: datetime | None = None


@dataclass(frozen=True)
class AdvancementResult:
    now: datetime
    weeks_elapsed: int
    weeks_passed: int
    target_reading_minutes: int
    achieved_reading_minutes: float
    new_rate: int | None = None  # None leaves the profile untouched
    checkpoint_id: int | None = None  # None inserts a new checkpoint

    @property
    def seeds_checkpoint(self) -> bool:
        return self.checkpoint_id is None


@dataclass(frozen=True)
class NoAdvancement:
    reason: str


def _checkpoint_from_row(row: dict) -> WeeklyProgressCheckpoint:
    try:
        date_created = parse_timestamp(row.get("date_created"))
    except (TypeError, ValueError):
        raise InvalidProfileError(f"checkpoint {row['id']} has a bad date: {row.get('date_created')!r}") from None
    return WeeklyProgressCheckpoint(
        id=row["id"],
        weeks_passed=row["weeks_passed"],
        target_reading_minutes=row["target_reading_minutes"],
        achieved_reading_minutes=row["achieved_reading_minutes"],
        date_created=date_created,
    )


async def load_last_checkpoint(store: Store) -> WeeklyProgressCheckpoint | None:
    row = await store.query_first(
        "SELECT * FROM weekly_progress ORDER BY id DESC LIMIT 1"
    )
    return _checkpoint_from_row(row) if row is not None else None


async def list_checkpoints(store: Store) -> list[WeeklyProgressCheckpoint]:
    rows = await store.query_all("SELECT * FROM weekly_progress ORDER BY id DESC")
    return [_checkpoint_from_row(row) for row in rows]


def weeks_between(since: datetime, now: datetime) -> int:
    """Whole weeks between two instants, counted in calendar days."""
    days = (to_utc_naive(now).date() - to_utc_naive(since).date()).days
    return int(days / 7)


def round_half_up(value: float) -> int:
    # round() would send 30.5 to 30
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def _validate(profile: GoalProfile) -> None:
    rates = {
        "initial rate": profile.initial_rate_minutes_per_day,
        "end rate": profile.end_rate_goal_minutes_per_day,
        "current rate": profile.current_rate_minutes_per_day,
    }
    for name, rate in rates.items():
        if rate <= 0:
            raise InvalidProfileError(f"{name} must be positive, got {rate}")
    pct = profile.weekly_rate_increase_percentage
    if not math.isfinite(pct) or pct < 0:
        raise InvalidProfileError(f"weekly increase percentage is invalid: {pct}")


def compute_advancement(
    profile: GoalProfile,
    last_checkpoint: WeeklyProgressCheckpoint | None,
    now: datetime,
) -> AdvancementResult | NoAdvancement:
    """Decide whether the daily rate advances at ``now`` and by how much.

    Raises InvalidProfileError for non-positive rates or a bad percentage.
    """
    _validate(profile)
    now = to_utc_naive(now)

    since = profile.current_rate_last_updated or now
    weeks = weeks_between(since, now)
    if weeks <= 0:
        return NoAdvancement("less than a week since the last update")
    if profile.end_rate_goal_date is None or profile.end_rate_goal_date <= now:
        return NoAdvancement("goal date has passed")

    if last_checkpoint is None:
        return AdvancementResult(
            now=now,
            weeks_elapsed=weeks,
            weeks_passed=0,
            target_reading_minutes=profile.end_rate_goal_minutes_per_day,
            achieved_reading_minutes=round_half_up(profile.initial_rate_minutes_per_day),
        )

    current = profile.current_rate_minutes_per_day
    end = profile.end_rate_goal_minutes_per_day
    if current >= end:
        return NoAdvancement("goal rate reached")

    new_rate = current * (1 + profile.weekly_rate_increase_percentage / 100)
    new_rate = min(new_rate, end)
    new_rate = max(new_rate, current + 1)

    return AdvancementResult(
        now=now,
        weeks_elapsed=weeks,
        weeks_passed=weeks,
        target_reading_minutes=end,
        achieved_reading_minutes=new_rate,
        new_rate=round_half_up(new_rate),
        checkpoint_id=last_checkpoint.id,
    )


async def apply_advancement(store: Store, result: AdvancementResult) -> None:
    """Persist an advancement: profile rate first, then the checkpoint."""
    now = format_timestamp(result.now)
    if result.new_rate is not None:
        await store.execute(
            """
            UPDATE user_preferences
            SET current_reading_rate_minutes_per_day = :rate,
                current_reading_rate_last_updated = :now
            WHERE id = :id
            """,
            {"rate": result.new_rate, "now": now, "id": PROFILE_ID},
        )

    if result.checkpoint_id is None:
        await store.execute(
            """
            INSERT INTO weekly_progress
                (weeks_passed, target_reading_minutes, achieved_reading_minutes, date_created)
            VALUES (:weeks, :target, :achieved, :now)
            """,
            {
                "weeks": result.weeks_passed,
                "target": result.target_reading_minutes,
                "achieved": result.achieved_reading_minutes,
                "now": now,
            },
        )
    else:
        await store.execute(
            """
            UPDATE weekly_progress
            SET weeks_passed = :weeks, achieved_reading_minutes = :achieved
            WHERE id = :id
            """,
            {
                "weeks": result.weeks_passed,
                "achieved": result.achieved_reading_minutes,
                "id": result.checkpoint_id,
            },
        )


async def advance_reading_rate(
    store: Store, now: datetime | None = None
) -> AdvancementResult | NoAdvancement | None:
    """Run the weekly advancement once. Never raises.

    Returns None when there is no profile or when a storage or data problem
    made the run skip; the next run retries from the same state.
    """
    now = to_utc_naive(now) if now is not None else utcnow()

    try:
        profile = await load_goal_profile(store)
        if profile is None:
            logger.info("No reading goal profile yet, skipping rate advancement")
            return None
        last_checkpoint = await load_last_checkpoint(store)
    except StorageReadError as e:
        logger.error("Could not read reading goal state: %s", e)
        return None
    except InvalidProfileError as e:
        logger.warning("Skipping rate advancement, profile data is invalid: %s", e)
        return None

    try:
        outcome = compute_advancement(profile, last_checkpoint, now)
    except InvalidProfileError as e:
        logger.warning("Skipping rate advancement, profile data is invalid: %s", e)
        return None

    if isinstance(outcome, NoAdvancement):
        logger.debug("No rate advancement: %s", outcome.reason)
        return outcome

    try:
        await apply_advancement(store, outcome)
    except StorageWriteError as e:
        logger.error("Could not save rate advancement: %s", e)
        return None

    if outcome.seeds_checkpoint:
        logger.info(
            "Seeded weekly progress at %s min/day (target %d)",
            outcome.achieved_reading_minutes,
            outcome.target_reading_minutes,
        )
    else:
        logger.info(
            "Daily reading goal advanced %d -> %d min/day after %d week(s)",
            profile.current_rate_minutes_per_day,
            outcome.new_rate,
            outcome.weeks_elapsed,
        )
    return outcome
