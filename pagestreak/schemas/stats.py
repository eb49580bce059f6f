import datetime as dt

from pydantic import BaseModel, ConfigDict


class TodayStats(BaseModel):
    date: dt.date
    minutes: int
    goal_minutes: int
    goal_met: bool
    percentage: int


class StreakResponse(BaseModel):
    daily_goal: int
    current_streak: int


class DayTotal(BaseModel):
    date: dt.date
    minutes: int


class DayStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: dt.date
    minutes: int
    sessions: int
    goal_met: bool


class StreakInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_streak: int
    longest_streak: int
    streak_this_week: int


class TopBookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    book_id: int
    title: str
    author: str
    minutes_read: int
    sessions_count: int


class WeeklyStatsResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week_start: dt.date
    week_end: dt.date
    daily_goal: int
    total_minutes: int
    average_minutes_per_day: float
    reading_days: int
    sessions_count: int
    goal_progress: float
    streak: StreakInfoResponse
    top_book: TopBookResponse | None
    books_read: list[str]
    daily_breakdown: list[DayStatsResponse]
