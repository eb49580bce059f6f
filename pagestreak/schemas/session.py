import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class ReadingSessionCreate(BaseModel):
    book_id: int
    minutes_read: int = Field(ge=1, description="Minutes spent reading")
    pages_read: int | None = Field(None, ge=1, description="Pages read in this session")
    date: dt.date | None = None  # defaults to today in the endpoint
    notes: str | None = None


class ReadingSessionUpdate(BaseModel):
    minutes_read: int | None = Field(None, ge=1)
    pages_read: int | None = Field(None, ge=1)
    notes: str | None = None


class ReadingSessionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    book_id: int
    minutes_read: int
    pages_read: int | None
    date: dt.date
    notes: str | None
    created_at: dt.datetime


class ReadingSessionWithBook(ReadingSessionResponse):
    book_title: str
    book_author: str
