"""Phase schemas for API request/response."""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.phasetracker.models import PhaseStatus


class PhaseCreate(BaseModel):
    """Schema for adding a phase.

    Name emptiness is checked by PhaseService so it is reported as a 400.
    """

    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)


class PhaseUpdate(BaseModel):
    """Schema for updating a phase.

    Only fields present in the request body are applied, so
    `estimated_completion_at: null` clears the date while omitting the key
    leaves it as is.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    estimated_completion_at: date | None = Field(default=None, alias="estimatedCompletionAt")


class ReorderRequest(BaseModel):
    """Full ordering of a project's phases, first to last.

    Left untyped so PhaseService can reject malformed payloads with a 400.
    """

    model_config = ConfigDict(populate_by_name=True)

    ordered_phase_ids: Any = Field(default=None, alias="orderedPhaseIds")


class PhaseRead(BaseModel):
    """Schema for reading a phase."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_id: int
    name: str
    description: str | None
    order: int
    is_active: bool
    is_completed: bool
    status: PhaseStatus
    estimated_completion_at: date | None
    created_at: datetime
    updated_at: datetime
