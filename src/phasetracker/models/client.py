"""Client records, their login codes and project assignments."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from src.phasetracker.models.base import utc_now


class Client(SQLModel, table=True):
    """Client identity. No password; each login is a fresh code round-trip."""

    __tablename__ = "clients"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())


class ClientVerificationCode(SQLModel, table=True):
    """One-time login code for a client."""

    __tablename__ = "client_codes"

    id: int | None = Field(default=None, primary_key=True)
    client_id: int = Field(foreign_key="clients.id", ondelete="CASCADE", index=True)
    code: str = Field(max_length=6)
    expires_at: datetime = Field(sa_type=DateTime())
    used_at: datetime | None = Field(default=None, sa_type=DateTime())
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())


class ProjectClient(SQLModel, table=True):
    """Many-to-many association between projects and clients."""

    __tablename__ = "project_clients"

    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", primary_key=True)
    client_id: int = Field(foreign_key="clients.id", ondelete="CASCADE", primary_key=True)
