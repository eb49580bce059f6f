from contextlib import asynccontextmanager

from fastapi import FastAPI

from pagestreak.config import ADVANCE_ON_STARTUP
from pagestreak.database import async_session
from pagestreak.routers import books, profile, sessions, stats
from pagestreak.services.progression import advance_reading_rate
from pagestreak.store import SessionStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    if ADVANCE_ON_STARTUP:
        async with async_session() as session:
            await advance_reading_rate(SessionStore(session))
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="Pagestreak", version="0.1.0", lifespan=lifespan)
    app.include_router(books.router)
    app.include_router(sessions.router)
    app.include_router(stats.router)
    app.include_router(profile.router)
    return app


app = create_app()
