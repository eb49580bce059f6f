from pagestreak.models.book import READING_STATUSES, Book
from pagestreak.models.preferences import UserPreferences
from pagestreak.models.progress import WeeklyProgress
from pagestreak.models.session import ReadingSession

__all__ = ["READING_STATUSES", "Book", "ReadingSession", "UserPreferences", "WeeklyProgress"]
