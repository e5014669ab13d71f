"""Repository for Phase entity.

The multi-row statements here never commit; PhaseService wraps them in a
single transaction so a partial activation or reorder is never visible.
"""

from collections.abc import Sequence

from sqlalchemy import func, update
from sqlmodel import select

from src.phasetracker.models import Phase
from src.phasetracker.models.base import utc_now
from src.phasetracker.repositories.base import BaseRepository


class PhaseRepository(BaseRepository[Phase]):
    """Repository for Phase entity."""

    model = Phase

    async def get_max_order(self, project_id: int) -> int:
        """Highest order in the project, or 0 when it has no phases."""
        result = await self.session.execute(
            select(func.max(Phase.order)).where(Phase.project_id == project_id)
        )
        return result.scalar_one_or_none() or 0

    async def list_by_project(self, project_id: int) -> list[Phase]:
        """All phases of a project, ordered by `order` then ID."""
        result = await self.session.execute(
            select(Phase)
            .where(Phase.project_id == project_id)
            .order_by(Phase.order, Phase.id)  # type: ignore[arg-type]
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_by_ids(self, phase_ids: Sequence[int]) -> list[Phase]:
        if not phase_ids:
            return []
        result = await self.session.execute(
            select(Phase).where(Phase.id.in_(phase_ids))  # type: ignore[union-attr]
        )
        return list(result.scalars().all())

    async def complete_before(self, project_id: int, order: int) -> None:
        """Force every phase ordered before `order` to completed and inactive."""
        await self.session.execute(
            update(Phase)
            .where(Phase.project_id == project_id)  # type: ignore[arg-type]
            .where(Phase.order < order)  # type: ignore[arg-type]
            .values(is_completed=True, is_active=False, updated_at=utc_now())
        )

    async def clear_active(self, project_id: int) -> None:
        """Clear the active flag on every phase of the project."""
        await self.session.execute(
            update(Phase)
            .where(Phase.project_id == project_id)  # type: ignore[arg-type]
            .values(is_active=False)
        )

    async def activate(self, project_id: int, phase_id: int) -> None:
        await self.session.execute(
            update(Phase)
            .where(Phase.project_id == project_id)  # type: ignore[arg-type]
            .where(Phase.id == phase_id)  # type: ignore[arg-type]
            .values(is_active=True, is_completed=False, updated_at=utc_now())
        )

    async def set_flags(self, phase: Phase, *, is_active: bool, is_completed: bool) -> Phase:
        phase.is_active = is_active
        phase.is_completed = is_completed
        phase.updated_at = utc_now()
        self.session.add(phase)
        await self.session.flush()
        return phase

    async def set_order(self, phase_id: int, order: int) -> None:
        await self.session.execute(
            update(Phase)
            .where(Phase.id == phase_id)  # type: ignore[arg-type]
            .values({Phase.order: order, Phase.updated_at: utc_now()})
        )
