"""Database session management and transaction scope."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.phasetracker.core.db.engine import get_engine
from src.phasetracker.core.exceptions import StorageError
from src.phasetracker.core.logging import get_logger

logger = get_logger(__name__)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_session(engine: AsyncEngine | None = None) -> AsyncGenerator[AsyncSession]:
    """Create a database session.

    Args:
        engine: Optional engine override for testing.
    """
    if engine is None:
        engine = get_engine()

    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        yield session


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncGenerator[AsyncSession]:
    """Run a unit of work that commits on success and rolls back on any error.

    Every statement issued inside the block is committed together. Domain
    errors propagate unchanged; driver failures are re-raised as StorageError.

    Usage:
        async with transaction(self.session):
            await self.phase_repo.complete_before(project_id, order)
            ...
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("Transaction rolled back", error=str(e))
        raise StorageError(str(e)) from e
    except Exception:
        await session.rollback()
        raise
