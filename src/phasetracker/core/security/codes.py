"""One-time verification codes."""

import secrets
from datetime import datetime, timedelta

from src.phasetracker.core.config import get_settings
from src.phasetracker.models.base import utc_now

CODE_MIN = 100_000
CODE_MAX = 999_999


def generate_code() -> str:
    """Return a uniformly random 6-digit code in [100000, 999999]."""
    return str(CODE_MIN + secrets.randbelow(CODE_MAX - CODE_MIN + 1))


def issue_code(now: datetime | None = None) -> tuple[str, datetime]:
    """Generate a one-time code and its expiry (naive UTC).

    Pure: the caller persists the code against exactly one owner.
    """
    settings = get_settings()
    issued_at = now or utc_now()
    expires_at = issued_at + timedelta(minutes=settings.verification_code_expire_minutes)
    return generate_code(), expires_at
