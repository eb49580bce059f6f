from pagestreak.id import make_book_id
from pagestreak.mcp.client import PagestreakClient


async def add_book(
    client: PagestreakClient,
    title: str,
    author: str,
    page_count: int | None = None,
    status: str | None = None,
) -> dict:
    body: dict = {"title": title, "author": author}
    if page_count is not None:
        body["page_count"] = page_count
    if status is not None:
        body["reading_status"] = status
    return await client.post("/api/books", json=body)


async def update_book_status(
    client: PagestreakClient,
    title: str,
    author: str,
    status: str,
    current_page: int | None = None,
) -> dict:
    book_id = make_book_id(title, author)
    body: dict = {"reading_status": status}
    if current_page is not None:
        body["current_page"] = current_page
    return await client.put(f"/api/books/{book_id}", json=body)
