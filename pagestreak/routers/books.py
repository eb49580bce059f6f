from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from pagestreak.database import get_session
from pagestreak.id import make_book_id
from pagestreak.models import Book
from pagestreak.schemas.book import (
    BookCreate,
    BookProgressResponse,
    BookReadingTime,
    BookResponse,
    BookUpdate,
    ReadingStatus,
)
from pagestreak.services.reading_stats import book_progress, book_reading_minutes

router = APIRouter(prefix="/api/books", tags=["books"])


async def get_book_or_404(session: AsyncSession, book_id: int) -> Book:
    book = (await session.execute(select(Book).where(Book.id == book_id))).scalar_one_or_none()
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


def _apply_status_change(book: Book, changes: dict) -> None:
    status = changes.get("reading_status")
    if status == "currently_reading" and book.date_started is None and "date_started" not in changes:
        book.date_started = date.today()
    elif status == "read":
        if book.date_finished is None and "date_finished" not in changes:
            book.date_finished = date.today()
        if book.page_count and "current_page" not in changes:
            book.current_page = book.page_count


@router.get("/stats")
async def book_stats(session: AsyncSession = Depends(get_session)):
    result = await session.execute(select(Book.reading_status, func.count(Book.id)).group_by(Book.reading_status))
    by_status = {status: count for status, count in result.all()}
    return {"total_books": sum(by_status.values()), "by_status": by_status}


@router.get("", response_model=list[BookResponse])
async def list_books(
    status: ReadingStatus | None = None,
    author: str | None = None,
    q: str | None = None,
    sort: Literal["title", "author", "created_at"] = "title",
    order: Literal["asc", "desc"] = "asc",
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_session),
):
    stmt = select(Book)
    if status:
        stmt = stmt.where(Book.reading_status == status)
    if author:
        stmt = stmt.where(Book.author.ilike(f"%{author}%"))
    if q:
        stmt = stmt.where(Book.title.ilike(f"%{q}%"))
    col = getattr(Book, sort)
    stmt = stmt.order_by(col.desc() if order == "desc" else col.asc())
    stmt = stmt.offset(offset).limit(limit)
    result = await session.execute(stmt)
    return result.scalars().all()


@router.get("/by-name/{title}/{author}", response_model=BookResponse)
async def get_book_by_name(title: str, author: str, session: AsyncSession = Depends(get_session)):
    return await get_book_or_404(session, make_book_id(title, author))


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: int, session: AsyncSession = Depends(get_session)):
    return await get_book_or_404(session, book_id)


@router.post("", response_model=BookResponse, status_code=201)
async def create_book(data: BookCreate, session: AsyncSession = Depends(get_session)):
    book_id = make_book_id(data.title, data.author)
    existing = await session.get(Book, book_id)
    if existing is not None:
        raise HTTPException(status_code=409, detail="Book already exists")

    book = Book(id=book_id, **data.model_dump())
    _apply_status_change(book, data.model_dump(exclude_unset=True))
    session.add(book)
    await session.commit()
    await session.refresh(book)
    return book


@router.put("/{book_id}", response_model=BookResponse)
async def update_book(book_id: int, data: BookUpdate, session: AsyncSession = Depends(get_session)):
    book = await get_book_or_404(session, book_id)
    changes = data.model_dump(exclude_unset=True)
    for key, value in changes.items():
        setattr(book, key, value)
    _apply_status_change(book, changes)
    await session.commit()
    await session.refresh(book)
    return book


@router.delete("/{book_id}", status_code=204)
async def delete_book(book_id: int, session: AsyncSession = Depends(get_session)):
    book = await get_book_or_404(session, book_id)
    await session.delete(book)
    await session.commit()


@router.get("/{book_id}/progress", response_model=BookProgressResponse)
async def get_book_progress(book_id: int, session: AsyncSession = Depends(get_session)):
    book = await get_book_or_404(session, book_id)
    return await book_progress(session, book)


@router.get("/{book_id}/reading-time", response_model=BookReadingTime)
async def get_book_reading_time(book_id: int, session: AsyncSession = Depends(get_session)):
    await get_book_or_404(session, book_id)
    minutes = await book_reading_minutes(session, book_id)
    return BookReadingTime(book_id=book_id, minutes_read=minutes)
