"""Alembic migration runner."""

from alembic.config import Config

from alembic import command


def run_migrations_sync(revision: str = "head") -> None:
    """Upgrade the database schema to the given revision."""
    alembic_cfg = Config("alembic.ini")
    command.upgrade(alembic_cfg, revision)
