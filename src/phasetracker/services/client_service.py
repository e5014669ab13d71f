"""Client assignment service."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.phasetracker.core.db import transaction
from src.phasetracker.core.exceptions import NotFoundError
from src.phasetracker.core.logging import get_logger
from src.phasetracker.core.notifications import send_project_assignment_email
from src.phasetracker.models import Client
from src.phasetracker.repositories import (
    ClientRepository,
    ProjectClientRepository,
    ProjectRepository,
)

logger = get_logger(__name__)


class ClientService:
    """Assigns clients to projects and removes them."""

    def __init__(
        self,
        client_repo: ClientRepository,
        project_client_repo: ProjectClientRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
    ):
        self.client_repo = client_repo
        self.project_client_repo = project_client_repo
        self.project_repo = project_repo
        self.session = session

    async def assign_client(self, project_id: int, email: str) -> tuple[Client, bool]:
        """Assign a client to a project by email.

        The client row is created on first reference. Assigning twice is a
        no-op; the notification email is only sent for a new assignment.

        Returns:
            Tuple of (client, newly_assigned)

        Raises:
            NotFoundError: If the project does not exist
        """
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")

        async with transaction(self.session):
            client, created = await self.client_repo.get_or_create(email)
            assert client.id is not None
            newly_assigned = await self.project_client_repo.assign(project_id, client.id)

        logger.info(
            "Client assigned",
            project_id=project_id,
            client_id=client.id,
            client_created=created,
            newly_assigned=newly_assigned,
        )

        if newly_assigned and not send_project_assignment_email(email, project.name):
            logger.warning("Assignment email not delivered", client_id=client.id)

        return client, newly_assigned

    async def remove_client(self, project_id: int, client_id: int) -> None:
        """Remove an assignment. Removing an absent assignment succeeds."""
        async with transaction(self.session):
            removed = await self.project_client_repo.remove(project_id, client_id)
        logger.info("Client removed", project_id=project_id, client_id=client_id, removed=removed)
