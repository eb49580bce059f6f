from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pagestreak.database import get_session, get_store
from pagestreak.schemas.stats import DayTotal, StreakResponse, TodayStats, WeeklyStatsResponse
from pagestreak.services.goals import current_daily_goal
from pagestreak.services.reading_stats import (
    last_seven_days,
    minutes_on,
    reading_streak,
    weekly_stats,
)
from pagestreak.store import SessionStore

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/today", response_model=TodayStats)
async def today_stats(
    session: AsyncSession = Depends(get_session),
    store: SessionStore = Depends(get_store),
):
    today = date.today()
    goal = await current_daily_goal(store)
    minutes = await minutes_on(session, today)
    return TodayStats(
        date=today,
        minutes=minutes,
        goal_minutes=goal,
        goal_met=minutes >= goal,
        percentage=min(round(minutes / goal * 100), 100) if goal > 0 else 0,
    )


@router.get("/streak", response_model=StreakResponse)
async def streak(
    session: AsyncSession = Depends(get_session),
    store: SessionStore = Depends(get_store),
):
    goal = await current_daily_goal(store)
    return StreakResponse(daily_goal=goal, current_streak=await reading_streak(session, goal, date.today()))


@router.get("/last-7-days", response_model=list[DayTotal])
async def last_7_days(session: AsyncSession = Depends(get_session)):
    days = await last_seven_days(session, date.today())
    return [DayTotal(date=day, minutes=minutes) for day, minutes in days]


@router.get("/weekly", response_model=WeeklyStatsResponse)
async def weekly(
    week_start: date | None = Query(None, description="Any day in the week (defaults to this week)"),
    session: AsyncSession = Depends(get_session),
    store: SessionStore = Depends(get_store),
):
    today = date.today()
    goal = await current_daily_goal(store)
    return await weekly_stats(session, week_start or today, goal, today)
