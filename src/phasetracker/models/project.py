"""Projects and their ordered phases."""

from datetime import date, datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from src.phasetracker.models.base import utc_now
from src.phasetracker.models.enums import PhaseStatus, ProjectStatus


class Project(SQLModel, table=True):
    """Project owned by the admin who created it (soft reference)."""

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20, index=True)
    created_by_admin_id: int | None = Field(
        default=None, foreign_key="admins.id", ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utc_now, index=True, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())


class Phase(SQLModel, table=True):
    """A stage of a project.

    `order` is unique within a project by convention only; the lifecycle
    engine, not the schema, keeps at most one phase per project active.
    """

    __tablename__ = "phases"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", ondelete="CASCADE", index=True)
    name: str = Field(max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    order: int = Field(sa_column_kwargs={"name": "phase_order"})
    is_active: bool = Field(default=False)
    is_completed: bool = Field(default=False)
    estimated_completion_at: date | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())

    @property
    def status(self) -> PhaseStatus:
        if self.is_active:
            return PhaseStatus.ACTIVE
        if self.is_completed:
            return PhaseStatus.COMPLETED
        return PhaseStatus.PENDING
