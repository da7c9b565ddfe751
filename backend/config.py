"""
Runtime configuration for the stats service and the evaluation run.

Everything is read from the environment (entry points call load_dotenv()
first, so a local .env works too):

  STARSHIP_REDIS_URL=redis://localhost:6379/0   use Redis instead of memory
  STARSHIP_STRICT_INGEST=1                      reject malformed event bodies
  STARSHIP_REPORT_PATH=user-sessions.txt
  STARSHIP_LOG_LEVEL=INFO
  STARSHIP_ALLOWED_ORIGINS=https://a.example,https://b.example
"""

import os
from typing import Optional


def _flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


def redis_url() -> Optional[str]:
    return os.environ.get("STARSHIP_REDIS_URL") or None


def strict_ingest() -> bool:
    return _flag("STARSHIP_STRICT_INGEST")


def report_path() -> str:
    return os.environ.get("STARSHIP_REPORT_PATH", "user-sessions.txt")


def log_level() -> str:
    return os.environ.get("STARSHIP_LOG_LEVEL", "INFO").upper()


def allowed_origins() -> list[str]:
    raw = os.environ.get("STARSHIP_ALLOWED_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]
