from datetime import UTC, datetime

from sqlalchemy import DateTime, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from pagestreak.database import Base


class WeeklyProgress(Base):
    __tablename__ = "weekly_progress"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    weeks_passed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    target_reading_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    achieved_reading_minutes: Mapped[float] = mapped_column(Float, nullable=False)
    date_created: Mapped[datetime] = mapped_column(DateTime, default=lambda: datetime.now(UTC))
