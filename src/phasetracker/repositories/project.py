"""Repository for Project entity."""

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import case, func
from sqlmodel import select

from src.phasetracker.models import Phase, Project, ProjectClient, ProjectStatus
from src.phasetracker.repositories.base import BaseRepository


@dataclass
class ProjectCounts:
    client_count: int = 0
    phases_count: int = 0
    phases_completed_count: int = 0


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    async def list_all(self) -> list[Project]:
        """All projects, newest first."""
        result = await self.session.execute(
            select(Project).order_by(Project.created_at.desc(), Project.id.desc())  # type: ignore[attr-defined,union-attr]
        )
        return list(result.scalars().all())

    async def list_active_by_ids(self, project_ids: Sequence[int]) -> list[Project]:
        """Projects among `project_ids` whose status is Active."""
        if not project_ids:
            return []
        result = await self.session.execute(
            select(Project)
            .where(
                Project.id.in_(project_ids),  # type: ignore[union-attr]
                Project.status == ProjectStatus.ACTIVE.value,
            )
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def counts_for(self, project_ids: Sequence[int]) -> dict[int, ProjectCounts]:
        """Client, phase and completed-phase counts keyed by project ID."""
        counts = {project_id: ProjectCounts() for project_id in project_ids}
        if not project_ids:
            return counts

        phase_rows = await self.session.execute(
            select(
                Phase.project_id,
                func.count(Phase.id),  # type: ignore[arg-type]
                func.sum(case((Phase.is_completed == True, 1), else_=0)),  # noqa: E712
            )
            .where(Phase.project_id.in_(project_ids))  # type: ignore[attr-defined]
            .group_by(Phase.project_id)
        )
        for project_id, total, completed in phase_rows.all():
            counts[project_id].phases_count = total or 0
            counts[project_id].phases_completed_count = completed or 0

        client_rows = await self.session.execute(
            select(ProjectClient.project_id, func.count(ProjectClient.client_id))
            .where(ProjectClient.project_id.in_(project_ids))  # type: ignore[attr-defined]
            .group_by(ProjectClient.project_id)
        )
        for project_id, total in client_rows.all():
            counts[project_id].client_count = total or 0

        return counts
