"""Project management service for admins."""

from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.phasetracker.core.db import transaction
from src.phasetracker.core.exceptions import NotFoundError, ValidationError
from src.phasetracker.core.logging import get_logger
from src.phasetracker.models import Client, Phase, Project, ProjectStatus
from src.phasetracker.models.base import utc_now
from src.phasetracker.repositories import (
    ClientRepository,
    PhaseRepository,
    ProjectCounts,
    ProjectRepository,
)

logger = get_logger(__name__)


@dataclass
class ProjectSummary:
    project: Project
    counts: ProjectCounts


@dataclass
class ProjectDetails:
    project: Project
    phases: list[Phase] = field(default_factory=list)
    clients: list[Client] = field(default_factory=list)


def _require_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Project name is required")
    return name.strip()


def _require_status(status: str) -> str:
    try:
        return ProjectStatus(status).value
    except ValueError:
        raise ValidationError(f"Invalid project status: {status}") from None


class ProjectService:
    """Project CRUD - business logic only."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        phase_repo: PhaseRepository,
        client_repo: ClientRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.phase_repo = phase_repo
        self.client_repo = client_repo
        self.session = session

    async def get_project(self, project_id: int) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def create_project(
        self,
        name: str | None,
        description: str | None = None,
        status: str = ProjectStatus.ACTIVE.value,
        admin_id: int | None = None,
    ) -> Project:
        project = Project(
            name=_require_name(name),
            description=description,
            status=_require_status(status),
            created_by_admin_id=admin_id,
        )
        async with transaction(self.session):
            project = await self.project_repo.create(project)

        logger.info("Project created", project_id=project.id, admin_id=admin_id)
        return project

    async def list_projects(self) -> list[ProjectSummary]:
        """All projects, newest first, with client and phase counts."""
        projects = await self.project_repo.list_all()
        counts = await self.project_repo.counts_for([p.id for p in projects if p.id is not None])
        return [
            ProjectSummary(project=p, counts=counts.get(p.id, ProjectCounts()))  # type: ignore[arg-type]
            for p in projects
        ]

    async def get_project_details(self, project_id: int) -> ProjectDetails:
        project = await self.get_project(project_id)
        return ProjectDetails(
            project=project,
            phases=await self.phase_repo.list_by_project(project_id),
            clients=await self.client_repo.list_by_project(project_id),
        )

    async def update_project(self, project_id: int, changes: dict[str, Any]) -> Project:
        """Apply the supplied subset of name, description and status."""
        project = await self.get_project(project_id)

        if "name" in changes:
            project.name = _require_name(changes["name"])
        if "description" in changes:
            project.description = changes["description"]
        if "status" in changes:
            project.status = _require_status(changes["status"])
        project.updated_at = utc_now()

        async with transaction(self.session):
            self.project_repo.add(project)
            await self.session.flush()

        logger.info("Project updated", project_id=project_id, fields=sorted(changes))
        return project

    async def delete_project(self, project_id: int) -> None:
        """Delete a project; its phases and client assignments cascade."""
        project = await self.get_project(project_id)
        async with transaction(self.session):
            await self.project_repo.delete(project)
        logger.info("Project deleted", project_id=project_id)
