from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileUpdate(BaseModel):
    username: str = Field("Reader", min_length=1, max_length=100)
    yearly_book_goal: int = Field(12, ge=1)
    preferred_genres: list[str] = []
    initial_rate_minutes_per_day: int = Field(ge=1, description="Daily reading minutes to start from")
    end_rate_goal_minutes_per_day: int = Field(ge=1, description="Daily reading minutes to reach by year end")

    @field_validator("username")
    @classmethod
    def _strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username must not be blank")
        return v


class GoalProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    weekly_reading_goal_minutes: int
    initial_rate_minutes_per_day: int
    end_rate_goal_minutes_per_day: int
    end_rate_goal_date: datetime | None
    current_rate_minutes_per_day: int
    current_rate_last_updated: datetime | None
    weekly_rate_increase_minutes: int
    weekly_rate_increase_percentage: float


class ProfileResponse(BaseModel):
    username: str
    yearly_book_goal: int | None
    preferred_genres: list[str]
    goal: GoalProfileResponse


class CheckpointResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    weeks_passed: int
    target_reading_minutes: int
    achieved_reading_minutes: float
    date_created: datetime | None


class AdvancementResponse(BaseModel):
    advanced: bool
    seeded: bool = False
    reason: str | None = None
    weeks_elapsed: int | None = None
    current_rate_minutes_per_day: int | None = None
    checkpoint: CheckpointResponse | None = None
