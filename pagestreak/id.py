import hashlib
import re


def _normalize(value: str) -> str:
    s = value.lower()
    s = re.sub(r"[^a-z0-9]", "", s)
    return s[:50]


def make_book_id(title: str, author: str) -> int:
    """Stable id for a book, so the same title and author always map to one row."""
    key = f"{_normalize(title)}:{_normalize(author)}"
    return int(hashlib.sha256(key.encode()).hexdigest()[:15], 16)
