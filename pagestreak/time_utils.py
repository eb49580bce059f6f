from datetime import UTC, date, datetime, timedelta

# Layout SQLAlchemy's SQLite DateTime type reads and writes
_DB_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the database."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_utc_naive(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(UTC).replace(tzinfo=None)


def parse_timestamp(value) -> datetime | None:
    """Parse a stored timestamp.

    Accepts datetimes, ISO-8601 strings (with 'T' or space, optional 'Z' or
    offset) and plain dates. Returns None for NULL or empty values; raises
    ValueError for anything else that cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    s = str(value).strip()
    if s == "":
        return None
    return to_utc_naive(datetime.fromisoformat(s))


def format_timestamp(dt: datetime) -> str:
    return to_utc_naive(dt).strftime(_DB_FORMAT)


def end_of_year(dt: datetime) -> datetime:
    """Midnight at the start of Dec 31 of dt's year."""
    return datetime(dt.year, 12, 31)


def monday_of(d: date) -> date:
    # Monday = 0, Sunday = 6
    return d - timedelta(days=d.weekday())
