from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReadingStatus = Literal["want_to_read", "currently_reading", "read"]


class BookCreate(BaseModel):
    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    page_count: int | None = Field(None, ge=1)
    isbn: str | None = None
    cover_url: str | None = None
    publisher: str | None = None
    first_publish_year: int | None = None
    language: str = "eng"
    description: str | None = None
    reading_status: ReadingStatus = "want_to_read"
    notes: str | None = None


class BookUpdate(BaseModel):
    title: str | None = None
    author: str | None = None
    page_count: int | None = Field(None, ge=1)
    isbn: str | None = None
    cover_url: str | None = None
    publisher: str | None = None
    first_publish_year: int | None = None
    language: str | None = None
    description: str | None = None
    rating: float | None = Field(None, ge=0.0, le=5.0)
    reading_status: ReadingStatus | None = None
    current_page: int | None = Field(None, ge=0)
    date_started: date | None = None
    date_finished: date | None = None
    notes: str | None = None


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
    page_count: int | None
    isbn: str | None
    cover_url: str | None
    publisher: str | None
    first_publish_year: int | None
    language: str | None
    description: str | None
    rating: float | None
    reading_status: str
    current_page: int
    date_started: date | None
    date_finished: date | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class BookProgressResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    pages_read: int
    percentage: int
    is_complete: bool
    source: Literal["sessions", "current_page", "none"]


class BookReadingTime(BaseModel):
    book_id: int
    minutes_read: int
