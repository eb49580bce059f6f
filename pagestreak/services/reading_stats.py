"""Reading-time analytics over logged sessions."""

from dataclasses import dataclass, field
from datetime import date, timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pagestreak.models import Book, ReadingSession
from pagestreak.time_utils import monday_of


@dataclass
class BookProgress:
    pages_read: int
    percentage: int
    is_complete: bool
    source: str  # "sessions", "current_page" or "none"


@dataclass
class DayStats:
    date: date
    minutes: int
    sessions: int
    goal_met: bool


@dataclass
class StreakInfo:
    current_streak: int
    longest_streak: int
    streak_this_week: int


@dataclass
class TopBook:
    book_id: int
    title: str
    author: str
    minutes_read: int
    sessions_count: int


@dataclass
class WeeklyStats:
    week_start: date
    week_end: date
    daily_goal: int
    total_minutes: int
    average_minutes_per_day: float
    reading_days: int
    sessions_count: int
    goal_progress: float
    streak: StreakInfo
    top_book: TopBook | None = None
    books_read: list[str] = field(default_factory=list)
    daily_breakdown: list[DayStats] = field(default_factory=list)


def _percentage(pages: int, total_pages: int) -> int:
    if total_pages <= 0:
        return 0
    return min(round(pages / total_pages * 100), 100)


async def session_pages(session: AsyncSession, book_id: int) -> int:
    result = await session.execute(
        select(func.coalesce(func.sum(ReadingSession.pages_read), 0)).where(
            ReadingSession.book_id == book_id, ReadingSession.pages_read.is_not(None)
        )
    )
    return result.scalar_one()


async def book_progress(session: AsyncSession, book: Book) -> BookProgress:
    """Progress from logged session pages, falling back to the book's current page."""
    total_pages = book.page_count or 0
    pages = await session_pages(session, book.id)
    if pages > 0:
        pct = _percentage(pages, total_pages)
        return BookProgress(pages_read=pages, percentage=pct, is_complete=pct >= 100, source="sessions")
    if book.current_page and total_pages > 0:
        pct = _percentage(book.current_page, total_pages)
        return BookProgress(
            pages_read=book.current_page, percentage=pct, is_complete=pct >= 100, source="current_page"
        )
    return BookProgress(pages_read=0, percentage=0, is_complete=False, source="none")


async def sync_current_page(session: AsyncSession, book: Book) -> None:
    """Set the book's current page to the pages logged across its sessions."""
    pages = await session_pages(session, book.id)
    if pages > 0:
        book.current_page = pages


async def book_reading_minutes(session: AsyncSession, book_id: int) -> int:
    result = await session.execute(
        select(func.coalesce(func.sum(ReadingSession.minutes_read), 0)).where(
            ReadingSession.book_id == book_id
        )
    )
    return result.scalar_one()


async def minutes_on(session: AsyncSession, day: date) -> int:
    result = await session.execute(
        select(func.coalesce(func.sum(ReadingSession.minutes_read), 0)).where(ReadingSession.date == day)
    )
    return result.scalar_one()


async def daily_totals(
    session: AsyncSession, start: date | None = None, end: date | None = None
) -> dict[date, int]:
    stmt = select(ReadingSession.date, func.sum(ReadingSession.minutes_read)).group_by(ReadingSession.date)
    if start is not None:
        stmt = stmt.where(ReadingSession.date >= start)
    if end is not None:
        stmt = stmt.where(ReadingSession.date <= end)
    result = await session.execute(stmt)
    return {day: total for day, total in result.all()}


def _current_streak(goal_days: set[date], today: date) -> int:
    streak = 0
    day = today
    while day in goal_days:
        streak += 1
        day -= timedelta(days=1)
    return streak


def _longest_streak(goal_days: set[date]) -> int:
    longest = 0
    for day in goal_days:
        if day - timedelta(days=1) in goal_days:
            continue
        run = 1
        while day + timedelta(days=run) in goal_days:
            run += 1
        longest = max(longest, run)
    return longest


async def reading_streak(session: AsyncSession, daily_goal: int, today: date) -> int:
    """Consecutive days ending today on which the daily goal was met."""
    totals = await daily_totals(session, end=today)
    goal_days = {day for day, minutes in totals.items() if minutes >= daily_goal}
    return _current_streak(goal_days, today)


async def last_seven_days(session: AsyncSession, today: date) -> list[tuple[date, int]]:
    start = today - timedelta(days=6)
    totals = await daily_totals(session, start, today)
    days = [start + timedelta(days=i) for i in range(7)]
    return [(day, totals.get(day, 0)) for day in days]


async def weekly_stats(session: AsyncSession, week_start: date, daily_goal: int, today: date) -> WeeklyStats:
    """Summary of one Monday-to-Sunday week of reading."""
    start = monday_of(week_start)
    end = start + timedelta(days=6)

    result = await session.execute(
        select(ReadingSession, Book.title, Book.author)
        .join(Book)
        .where(ReadingSession.date >= start, ReadingSession.date <= end)
        .order_by(ReadingSession.date, ReadingSession.created_at)
    )
    rows = result.all()

    total = sum(s.minutes_read for s, _, _ in rows)
    reading_days = len({s.date for s, _, _ in rows})

    books_read: list[str] = []
    per_book: dict[int, TopBook] = {}
    for s, title, author in rows:
        label = f"{title} by {author}"
        if label not in books_read:
            books_read.append(label)
        top = per_book.setdefault(s.book_id, TopBook(s.book_id, title, author, 0, 0))
        top.minutes_read += s.minutes_read
        top.sessions_count += 1

    breakdown = []
    for i in range(7):
        day = start + timedelta(days=i)
        day_sessions = [s for s, _, _ in rows if s.date == day]
        minutes = sum(s.minutes_read for s in day_sessions)
        breakdown.append(DayStats(date=day, minutes=minutes, sessions=len(day_sessions), goal_met=minutes >= daily_goal))

    totals = await daily_totals(session, end=end)
    goal_days = {day for day, minutes in totals.items() if minutes >= daily_goal}
    streak = StreakInfo(
        current_streak=_current_streak(goal_days, today),
        longest_streak=_longest_streak(goal_days),
        streak_this_week=sum(1 for day in goal_days if start <= day <= end),
    )

    weekly_goal = daily_goal * 7
    return WeeklyStats(
        week_start=start,
        week_end=end,
        daily_goal=daily_goal,
        total_minutes=total,
        average_minutes_per_day=total / 7 if reading_days else 0.0,
        reading_days=reading_days,
        sessions_count=len(rows),
        goal_progress=total / weekly_goal * 100 if weekly_goal > 0 else 0.0,
        streak=streak,
        top_book=max(per_book.values(), key=lambda b: b.minutes_read, default=None),
        books_read=books_read,
        daily_breakdown=breakdown,
    )
