"""Repositories for clients, client codes and project assignments."""

from datetime import datetime

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.phasetracker.models import Client, ClientVerificationCode, ProjectClient
from src.phasetracker.models.base import utc_now
from src.phasetracker.repositories.base import BaseRepository


class ClientRepository(BaseRepository[Client]):
    """Repository for Client entity."""

    model = Client

    async def get_by_email(self, email: str) -> Client | None:
        """Get client by email address."""
        result = await self.session.execute(select(Client).where(Client.email == email))
        return result.scalar_one_or_none()

    async def get_or_create(self, email: str) -> tuple[Client, bool]:
        """Return the client for this email, creating it on first reference.

        Returns:
            Tuple of (client, created)
        """
        client = await self.get_by_email(email)
        if client is not None:
            return client, False
        return await self.create(Client(email=email)), True

    async def list_by_project(self, project_id: int) -> list[Client]:
        result = await self.session.execute(
            select(Client)
            .join(ProjectClient, ProjectClient.client_id == Client.id)  # type: ignore[arg-type]
            .where(ProjectClient.project_id == project_id)
            .order_by(Client.email)
        )
        return list(result.scalars().all())


class ClientVerificationCodeRepository(BaseRepository[ClientVerificationCode]):
    """Repository for client login codes."""

    model = ClientVerificationCode

    async def create_code(
        self, client_id: int, code: str, expires_at: datetime
    ) -> ClientVerificationCode:
        return await self.create(
            ClientVerificationCode(client_id=client_id, code=code, expires_at=expires_at)
        )

    async def get_by_client_and_code(
        self, client_id: int, code: str
    ) -> ClientVerificationCode | None:
        """Get the newest code row matching this client and exact code value."""
        result = await self.session.execute(
            select(ClientVerificationCode)
            .where(
                ClientVerificationCode.client_id == client_id,
                ClientVerificationCode.code == code,
            )
            .order_by(ClientVerificationCode.id.desc())  # type: ignore[union-attr]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def mark_used(self, code: ClientVerificationCode) -> ClientVerificationCode:
        """Mark a code as used."""
        code.used_at = utc_now()
        self.session.add(code)
        await self.session.flush()
        return code


class ProjectClientRepository:
    """Repository for the project <-> client association table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def is_assigned(self, project_id: int, client_id: int) -> bool:
        result = await self.session.execute(
            select(ProjectClient).where(
                ProjectClient.project_id == project_id,
                ProjectClient.client_id == client_id,
            )
        )
        return result.scalar_one_or_none() is not None

    async def assign(self, project_id: int, client_id: int) -> bool:
        """Insert the association, ignoring duplicates.

        Returns:
            True if a new row was inserted, False if it already existed
        """
        if await self.is_assigned(project_id, client_id):
            return False
        self.session.add(ProjectClient(project_id=project_id, client_id=client_id))
        await self.session.flush()
        return True

    async def remove(self, project_id: int, client_id: int) -> int:
        """Delete the association. Absence is not an error.

        Returns:
            Number of rows deleted (0 or 1)
        """
        result = await self.session.execute(
            delete(ProjectClient).where(
                ProjectClient.project_id == project_id,  # type: ignore[arg-type]
                ProjectClient.client_id == client_id,  # type: ignore[arg-type]
            )
        )
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def project_ids_for_client(self, client_id: int) -> list[int]:
        result = await self.session.execute(
            select(ProjectClient.project_id).where(ProjectClient.client_id == client_id)
        )
        return list(result.scalars().all())
