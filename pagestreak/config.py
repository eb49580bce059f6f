import os
from pathlib import Path

DB_PATH = os.environ.get("PAGESTREAK_DB_PATH", str(Path.cwd() / "pagestreak.db"))
DATABASE_URL = f"sqlite+aiosqlite:///{DB_PATH}"

# Run the weekly goal advancement once when the app starts
ADVANCE_ON_STARTUP = os.environ.get("PAGESTREAK_ADVANCE_ON_STARTUP", "1").lower() not in ("0", "false", "no")

LOG_LEVEL = os.environ.get("PAGESTREAK_LOG_LEVEL", "INFO").upper()
