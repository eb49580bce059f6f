from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pagestreak.database import Base


class UserPreferences(Base):
    """The single user profile row (id 1) with the reading-rate goal."""

    __tablename__ = "user_preferences"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    username: Mapped[str] = mapped_column(String(100), nullable=False, default="Reader")
    yearly_book_goal: Mapped[int | None] = mapped_column(Integer, default=12)
    preferred_genres: Mapped[str | None] = mapped_column(Text)
    weekly_reading_goal: Mapped[int | None] = mapped_column(Integer)
    initial_reading_rate_minutes_per_day: Mapped[int | None] = mapped_column(Integer)
    end_reading_rate_goal_minutes_per_day: Mapped[int | None] = mapped_column(Integer)
    end_reading_rate_goal_date: Mapped[datetime | None] = mapped_column(DateTime)
    current_reading_rate_minutes_per_day: Mapped[int | None] = mapped_column(Integer)
    current_reading_rate_last_updated: Mapped[datetime | None] = mapped_column(DateTime)
    weekly_reading_rate_increase_minutes: Mapped[int | None] = mapped_column(Integer)
    weekly_reading_rate_increase_percentage: Mapped[float | None] = mapped_column(Float)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))
