from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pagestreak.database import get_session
from pagestreak.models import Book, ReadingSession
from pagestreak.routers.books import get_book_or_404
from pagestreak.schemas.session import (
    ReadingSessionCreate,
    ReadingSessionResponse,
    ReadingSessionUpdate,
    ReadingSessionWithBook,
)
from pagestreak.services.reading_stats import sync_current_page

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


async def _get_session_or_404(session: AsyncSession, session_id: int) -> ReadingSession:
    result = await session.execute(select(ReadingSession).where(ReadingSession.id == session_id))
    reading_session = result.scalar_one_or_none()
    if reading_session is None:
        raise HTTPException(status_code=404, detail="Reading session not found")
    return reading_session


def _with_book(reading_session: ReadingSession, title: str, author: str) -> ReadingSessionWithBook:
    return ReadingSessionWithBook(
        **ReadingSessionResponse.model_validate(reading_session).model_dump(),
        book_title=title,
        book_author=author,
    )


@router.post("", response_model=ReadingSessionResponse, status_code=201)
async def log_session(data: ReadingSessionCreate, session: AsyncSession = Depends(get_session)):
    book = await get_book_or_404(session, data.book_id)
    reading_session = ReadingSession(
        book_id=book.id,
        minutes_read=data.minutes_read,
        pages_read=data.pages_read,
        date=data.date or date.today(),
        notes=data.notes,
    )
    session.add(reading_session)
    await session.flush()
    if data.pages_read is not None:
        await sync_current_page(session, book)
    await session.commit()
    await session.refresh(reading_session)
    return reading_session


@router.get("", response_model=list[ReadingSessionWithBook])
async def list_sessions(
    start_date: date | None = None,
    end_date: date | None = None,
    book_id: int | None = None,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    stmt = select(ReadingSession, Book.title, Book.author).join(Book)
    if start_date:
        stmt = stmt.where(ReadingSession.date >= start_date)
    if end_date:
        stmt = stmt.where(ReadingSession.date <= end_date)
    if book_id is not None:
        stmt = stmt.where(ReadingSession.book_id == book_id)
    stmt = stmt.order_by(ReadingSession.date.desc(), ReadingSession.created_at.desc())
    stmt = stmt.offset(offset).limit(limit)
    result = await session.execute(stmt)
    return [_with_book(s, title, author) for s, title, author in result.all()]


@router.get("/recent", response_model=list[ReadingSessionWithBook])
async def recent_sessions(
    limit: int = Query(5, ge=1, le=50),
    session: AsyncSession = Depends(get_session),
):
    result = await session.execute(
        select(ReadingSession, Book.title, Book.author)
        .join(Book)
        .order_by(ReadingSession.created_at.desc(), ReadingSession.id.desc())
        .limit(limit)
    )
    return [_with_book(s, title, author) for s, title, author in result.all()]


@router.put("/{session_id}", response_model=ReadingSessionResponse)
async def update_session(
    session_id: int,
    data: ReadingSessionUpdate,
    session: AsyncSession = Depends(get_session),
):
    reading_session = await _get_session_or_404(session, session_id)
    changes = data.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(reading_session, key, value)
    await session.flush()
    if "pages_read" in changes:
        book = await get_book_or_404(session, reading_session.book_id)
        await sync_current_page(session, book)
    await session.commit()
    await session.refresh(reading_session)
    return reading_session


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: int, session: AsyncSession = Depends(get_session)):
    reading_session = await _get_session_or_404(session, session_id)
    await session.delete(reading_session)
    await session.commit()
