"""Project schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.phasetracker.models import ProjectStatus
from src.phasetracker.schemas.client import ClientRead
from src.phasetracker.schemas.phase import PhaseRead


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: ProjectStatus = ProjectStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: ProjectStatus | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    status: ProjectStatus
    created_by_admin_id: int | None
    created_at: datetime
    updated_at: datetime


class ProjectSummaryRead(ProjectRead):
    """Project list entry with aggregate counts."""

    client_count: int = 0
    phases_count: int = 0
    phases_completed_count: int = 0


class ProjectDetailRead(ProjectRead):
    phases: list[PhaseRead] = []
    clients: list[ClientRead] = []


class ClientProjectRead(BaseModel):
    """Project as seen by an assigned client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime


class ClientProjectDetailRead(ClientProjectRead):
    phases: list[PhaseRead] = []
