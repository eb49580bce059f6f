from fastmcp import FastMCP

from pagestreak.mcp.client import PagestreakClient
from pagestreak.mcp.tools.goals import reading_goal as _reading_goal, weekly_summary as _weekly_summary
from pagestreak.mcp.tools.library import add_book as _add_book, update_book_status as _update_book_status
from pagestreak.mcp.tools.reading import log_reading as _log_reading, reading_history as _reading_history


def create_mcp_server(client: PagestreakClient) -> FastMCP:
    mcp = FastMCP(
        name="pagestreak",
        instructions=(
            "Pagestreak tracks a daily reading habit. Use these tools to add books, "
            "log reading sessions in minutes, and check progress against a daily "
            "reading-time goal that grows a little every week. Books are identified "
            "by title and author."
        ),
    )

    @mcp.tool()
    async def add_book(
        title: str,
        author: str,
        page_count: int | None = None,
        status: str | None = None,
    ) -> dict:
        """Add a book to the library. Status is one of 'want_to_read',
        'currently_reading' or 'read'."""
        return await _add_book(client, title=title, author=author, page_count=page_count, status=status)

    @mcp.tool()
    async def update_book_status(
        title: str,
        author: str,
        status: str,
        current_page: int | None = None,
    ) -> dict:
        """Move a book between 'want_to_read', 'currently_reading' and 'read',
        optionally recording the current page."""
        return await _update_book_status(
            client, title=title, author=author, status=status, current_page=current_page
        )

    @mcp.tool()
    async def log_reading(
        title: str,
        author: str,
        minutes: int,
        pages_read: int | None = None,
        session_date: str | None = None,
        notes: str | None = None,
    ) -> dict:
        """Log a reading session for a book: minutes read, optionally pages read,
        a date (YYYY-MM-DD, defaults to today) and notes."""
        return await _log_reading(
            client, title=title, author=author, minutes=minutes,
            pages_read=pages_read, session_date=session_date, notes=notes,
        )

    @mcp.tool()
    async def reading_history(title: str, author: str) -> dict:
        """All reading sessions for a book with total minutes and page progress."""
        return await _reading_history(client, title=title, author=author)

    @mcp.tool()
    async def reading_goal() -> dict:
        """Today's daily reading goal, minutes read so far today, the end goal
        and the latest weekly checkpoint."""
        return await _reading_goal(client)

    @mcp.tool()
    async def weekly_summary(week_start: str | None = None) -> dict:
        """Reading summary for a week (any day in it, YYYY-MM-DD; defaults to
        this week): totals, daily breakdown, streaks and top book."""
        return await _weekly_summary(client, week_start=week_start)

    return mcp
