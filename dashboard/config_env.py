# Configuration from environment variables (.env or Railway Variables).
# This is the only module that reads os.environ.

import os
from dotenv import load_dotenv

load_dotenv()


def _env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _env_float(key: str, default: float = 0.0) -> float:
    s = _env(key)
    if not s:
        return default
    try:
        return float(s)
    except ValueError:
        return default


# ============================================================================
# Database
# ============================================================================
# Railway gives postgres://, asyncpg needs postgresql+asyncpg://
DATABASE_URL_RAW = _env("DATABASE_URL")
DATABASE_URL_FALLBACK = _env("DATABASE_URL_FALLBACK", "sqlite+aiosqlite:///./local_dashboard.db")

# ============================================================================
# Sessions
# ============================================================================
# Empty means app.py signs cookies with a random per-process key.
SESSION_SECRET = _env("SESSION_SECRET")
SESSION_COOKIE = _env("SESSION_COOKIE", "dashboard_session")

# ============================================================================
# Misc
# ============================================================================
LOG_LEVEL = _env("LOG_LEVEL", "INFO").upper()

# The original demo slowed some fetches down to show streaming skeletons.
DEMO_FETCH_DELAY = _env_float("DEMO_FETCH_DELAY", 0.0)

PORT = _env("PORT", "8000")
