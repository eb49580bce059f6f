"""Row-level storage used by the goal progression core.

The core only needs three operations, so it depends on the small ``Store``
protocol rather than on SQLAlchemy directly. ``SessionStore`` provides them on
top of an ``AsyncSession``.
"""

from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


class StorageError(Exception):
    pass


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass


class Store(Protocol):
    async def execute(self, statement: str, params: dict[str, Any] | None = None) -> None: ...

    async def query_all(self, statement: str, params: dict[str, Any] | None = None) -> list[dict]: ...

    async def query_first(self, statement: str, params: dict[str, Any] | None = None) -> dict | None: ...


class SessionStore:
    """Store backed by a SQLAlchemy async session.

    Each ``execute`` commits on its own. Reads never commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: str, params: dict[str, Any] | None = None) -> None:
        try:
            await self.session.execute(text(statement), params or {})
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageWriteError(str(e)) from e

    async def query_all(self, statement: str, params: dict[str, Any] | None = None) -> list[dict]:
        try:
            result = await self.session.execute(text(statement), params or {})
        except SQLAlchemyError as e:
            raise StorageReadError(str(e)) from e
        return [dict(row) for row in result.mappings().all()]

    async def query_first(self, statement: str, params: dict[str, Any] | None = None) -> dict | None:
        try:
            result = await self.session.execute(text(statement), params or {})
        except SQLAlchemyError as e:
            raise StorageReadError(str(e)) from e
        row = result.mappings().first()
        return dict(row) if row is not None else None
