"""Database utilities - engine, session, transactions, migrations."""

from src.phasetracker.core.db.engine import (
    create_engine_from_url,
    dispose_engine,
    get_engine,
)
from src.phasetracker.core.db.migrations import run_migrations_sync
from src.phasetracker.core.db.session import get_session, transaction

__all__ = [
    # Engine
    "create_engine_from_url",
    "dispose_engine",
    "get_engine",
    # Session
    "get_session",
    "transaction",
    # Migrations
    "run_migrations_sync",
]
