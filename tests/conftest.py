"""Root test fixtures shared across all test types.

Environment is configured before any application import so Settings picks
up the test values. Database-backed fixtures are in tests/integration/conftest.py.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters-long")
# Cheap hashing keeps the suite fast
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "8192")
os.environ.setdefault("RESEND_API_KEY", "")

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import Iterator
from dataclasses import dataclass
from unittest.mock import MagicMock

import pytest

from src.phasetracker.core.config import get_settings

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@dataclass
class SentEmails:
    """Mocks standing in for the outbound email functions."""

    verification: MagicMock
    assignment: MagicMock

    def last_code(self) -> str:
        """Code passed to the most recent verification email."""
        return self.verification.call_args.args[1]


@pytest.fixture
def mock_email(monkeypatch: pytest.MonkeyPatch) -> Iterator[SentEmails]:
    """Patch outbound email at the services that send it.

    Both mocks report successful delivery.
    """
    verification = MagicMock(return_value=True)
    assignment = MagicMock(return_value=True)
    monkeypatch.setattr(
        "src.phasetracker.services.auth_service.send_verification_code_email", verification
    )
    monkeypatch.setattr(
        "src.phasetracker.services.client_service.send_project_assignment_email", assignment
    )
    yield SentEmails(verification=verification, assignment=assignment)
