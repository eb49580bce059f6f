import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from pagestreak.database import get_store
from pagestreak.schemas.profile import (
    AdvancementResponse,
    CheckpointResponse,
    GoalProfileResponse,
    ProfileResponse,
    ProfileUpdate,
)
from pagestreak.services.goals import (
    InvalidProfileError,
    derive_goal_profile,
    load_preferences,
    profile_from_row,
    save_goal_profile,
)
from pagestreak.services.progression import (
    NoAdvancement,
    advance_reading_rate,
    list_checkpoints,
    load_last_checkpoint,
)
from pagestreak.store import SessionStore, StorageReadError
from pagestreak.time_utils import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/profile", tags=["profile"])

SKIPPED = "skipped, see logs"


def _split_genres(value: str | None) -> list[str]:
    if not value:
        return []
    return [g.strip() for g in value.split(",") if g.strip()]


async def _profile_response(store: SessionStore) -> ProfileResponse:
    row = await load_preferences(store)
    if row is None:
        raise HTTPException(status_code=404, detail="Profile not set up")
    try:
        goal = profile_from_row(row)
    except InvalidProfileError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return ProfileResponse(
        username=row["username"],
        yearly_book_goal=row["yearly_book_goal"],
        preferred_genres=_split_genres(row["preferred_genres"]),
        goal=GoalProfileResponse(**asdict(goal)),
    )


@router.get("", response_model=ProfileResponse)
async def get_profile(store: SessionStore = Depends(get_store)):
    return await _profile_response(store)


@router.put("", response_model=ProfileResponse)
async def save_profile(data: ProfileUpdate, store: SessionStore = Depends(get_store)):
    """Onboarding and profile edits. Saving restarts the rate progression."""
    profile = derive_goal_profile(
        data.initial_rate_minutes_per_day,
        data.end_rate_goal_minutes_per_day,
        utcnow(),
    )
    await save_goal_profile(
        store,
        profile,
        username=data.username,
        yearly_book_goal=data.yearly_book_goal,
        preferred_genres=data.preferred_genres,
    )
    return await _profile_response(store)


@router.post("/advance", response_model=AdvancementResponse)
async def advance(store: SessionStore = Depends(get_store)):
    try:
        preferences = await load_preferences(store)
    except StorageReadError as e:
        logger.error("Could not read profile, skipping rate advancement: %s", e)
        return AdvancementResponse(advanced=False, reason=SKIPPED)
    if preferences is None:
        raise HTTPException(status_code=404, detail="Profile not set up")
    outcome = await advance_reading_rate(store)
    if outcome is None:
        return AdvancementResponse(advanced=False, reason=SKIPPED)
    if isinstance(outcome, NoAdvancement):
        return AdvancementResponse(advanced=False, reason=outcome.reason)
    checkpoint = await load_last_checkpoint(store)
    return AdvancementResponse(
        advanced=not outcome.seeds_checkpoint,
        seeded=outcome.seeds_checkpoint,
        weeks_elapsed=outcome.weeks_elapsed,
        current_rate_minutes_per_day=outcome.new_rate,
        checkpoint=CheckpointResponse.model_validate(checkpoint) if checkpoint else None,
    )


@router.get("/progress", response_model=list[CheckpointResponse])
async def progress_history(store: SessionStore = Depends(get_store)):
    try:
        checkpoints = await list_checkpoints(store)
    except InvalidProfileError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [CheckpointResponse.model_validate(c) for c in checkpoints]
