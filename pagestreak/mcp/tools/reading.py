from pagestreak.id import make_book_id
from pagestreak.mcp.client import PagestreakClient, is_error


async def log_reading(
    client: PagestreakClient,
    title: str,
    author: str,
    minutes: int,
    pages_read: int | None = None,
    session_date: str | None = None,
    notes: str | None = None,
) -> dict:
    body: dict = {"book_id": make_book_id(title, author), "minutes_read": minutes}
    if pages_read is not None:
        body["pages_read"] = pages_read
    if session_date is not None:
        body["date"] = session_date
    if notes is not None:
        body["notes"] = notes
    return await client.post("/api/sessions", json=body)


async def reading_history(
    client: PagestreakClient,
    title: str,
    author: str,
) -> dict:
    book_id = make_book_id(title, author)
    sessions = await client.get("/api/sessions", params={"book_id": book_id})
    if is_error(sessions):
        return sessions
    progress = await client.get(f"/api/books/{book_id}/progress")
    if is_error(progress):
        return progress
    return {
        "sessions": sessions,
        "total_minutes": sum(s["minutes_read"] for s in sessions),
        "progress": progress,
    }
