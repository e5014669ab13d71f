"""Read-only project views for authenticated clients."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.phasetracker.core.exceptions import ForbiddenError, NotFoundError
from src.phasetracker.core.logging import get_logger
from src.phasetracker.models import Phase, Project, ProjectStatus
from src.phasetracker.repositories import (
    PhaseRepository,
    ProjectClientRepository,
    ProjectRepository,
)

logger = get_logger(__name__)


class ClientViewService:
    """Client portal - only assigned, Active projects are visible."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        phase_repo: PhaseRepository,
        project_client_repo: ProjectClientRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.phase_repo = phase_repo
        self.project_client_repo = project_client_repo
        self.session = session

    async def list_projects(self, client_id: int) -> list[Project]:
        project_ids = await self.project_client_repo.project_ids_for_client(client_id)
        return await self.project_repo.list_active_by_ids(project_ids)

    async def get_project(self, client_id: int, project_id: int) -> tuple[Project, list[Phase]]:
        """Project with its phases, if the client may see it.

        Assignment is checked before existence, so an unassigned client gets
        the same answer whether or not the project exists.

        Raises:
            ForbiddenError: Not assigned, or the project is not Active
            NotFoundError: Assigned but the project is gone
        """
        if not await self.project_client_repo.is_assigned(project_id, client_id):
            logger.info("Client project access denied", reason="not_assigned", project_id=project_id)
            raise ForbiddenError("You do not have permission to access this project")

        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        if project.status != ProjectStatus.ACTIVE.value:
            logger.info("Client project access denied", reason="not_active", project_id=project_id)
            raise ForbiddenError("You do not have permission to access this project")

        return project, await self.phase_repo.list_by_project(project_id)
