import asyncio
import logging
import os
import subprocess
import sys
from pathlib import Path

from httpx import ASGITransport, AsyncClient

from pagestreak.app import create_app
from pagestreak.config import ADVANCE_ON_STARTUP, DB_PATH, LOG_LEVEL
from pagestreak.database import async_session, engine
from pagestreak.mcp.client import PagestreakClient
from pagestreak.mcp.server import create_mcp_server
from pagestreak.services.progression import advance_reading_rate
from pagestreak.store import SessionStore


def run_migrations():
    """Run Alembic migrations before starting the MCP server."""
    Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        capture_output=False,
        env=os.environ.copy(),
    )
    if result.returncode != 0:
        sys.exit(1)


async def advance_goal():
    async with async_session() as session:
        await advance_reading_rate(SessionStore(session))
    # connections must not outlive this event loop
    await engine.dispose()


def main():
    # stdout carries the MCP protocol
    logging.basicConfig(
        level=LOG_LEVEL,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run_migrations()
    # ASGITransport does not run the app lifespan
    if ADVANCE_ON_STARTUP:
        asyncio.run(advance_goal())

    app = create_app()
    transport = ASGITransport(app=app)
    http = AsyncClient(transport=transport, base_url="http://localhost")
    client = PagestreakClient(http)
    mcp = create_mcp_server(client)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
