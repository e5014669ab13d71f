"""Phase lifecycle service.

A phase is pending, active or completed:

    pending   (is_active=False, is_completed=False)
    active    (is_active=True,  is_completed=False)
    completed (is_active=False, is_completed=True)

At most one phase per project is active. Activating a phase completes every
phase ordered before it. Reopening a completed phase is the only backward
transition. Every multi-row change runs in one transaction.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.phasetracker.core.db import transaction
from src.phasetracker.core.exceptions import NotFoundError, OwnershipError, ValidationError
from src.phasetracker.core.logging import get_logger
from src.phasetracker.models import Phase
from src.phasetracker.models.base import utc_now
from src.phasetracker.repositories import PhaseRepository, ProjectRepository

logger = get_logger(__name__)


def _require_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Phase name is required")
    return name.strip()


def coerce_phase_ids(ordered_phase_ids: Any) -> list[int]:
    """Validate a reorder payload and return it as a list of ints.

    Raises:
        ValidationError: If the payload is not a non-empty list of distinct
            integer-coercible values
    """
    if not isinstance(ordered_phase_ids, list):
        raise ValidationError("orderedPhaseIds must be an array")
    if not ordered_phase_ids:
        raise ValidationError("orderedPhaseIds must not be empty")

    phase_ids: list[int] = []
    for value in ordered_phase_ids:
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ValidationError("Phase IDs must be integers")
        try:
            phase_ids.append(int(value))
        except (TypeError, ValueError):
            raise ValidationError("Phase IDs must be integers") from None

    if len(set(phase_ids)) != len(phase_ids):
        raise ValidationError("orderedPhaseIds must not contain duplicates")
    return phase_ids


class PhaseService:
    """Phase lifecycle engine - business logic only."""

    def __init__(
        self,
        phase_repo: PhaseRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
    ):
        self.phase_repo = phase_repo
        self.project_repo = project_repo
        self.session = session

    async def _require_project(self, project_id: int) -> None:
        if await self.project_repo.get_by_id(project_id) is None:
            raise NotFoundError("Project not found")

    async def _get_phase(self, phase_id: int, project_id: int | None = None) -> Phase:
        phase = await self.phase_repo.get_by_id(phase_id)
        if phase is None:
            raise NotFoundError("Phase not found")
        if project_id is not None and phase.project_id != project_id:
            raise OwnershipError()
        return phase

    async def list_phases(self, project_id: int) -> list[Phase]:
        await self._require_project(project_id)
        return await self.phase_repo.list_by_project(project_id)

    async def add_phase(
        self,
        project_id: int,
        name: str | None,
        description: str | None = None,
    ) -> Phase:
        """Append a pending phase after the project's current last phase."""
        name = _require_name(name)
        await self._require_project(project_id)

        async with transaction(self.session):
            order = await self.phase_repo.get_max_order(project_id) + 1
            phase = await self.phase_repo.create(
                Phase(project_id=project_id, name=name, description=description, order=order)
            )

        logger.info("Phase added", project_id=project_id, phase_id=phase.id, order=order)
        return phase

    async def set_active_phase(self, project_id: int, phase_id: int) -> Phase:
        """Make `phase_id` the single active phase of the project.

        Phases ordered before the target become completed, every other phase
        loses its active flag, and the target becomes active and not
        completed. Phases after the target keep their completion state.
        """
        phase = await self._get_phase(phase_id, project_id)

        async with transaction(self.session):
            await self.phase_repo.complete_before(project_id, phase.order)
            await self.phase_repo.clear_active(project_id)
            await self.phase_repo.activate(project_id, phase_id)

        await self.session.refresh(phase)
        logger.info("Phase activated", project_id=project_id, phase_id=phase_id)
        return phase

    async def set_phase_complete(self, project_id: int, phase_id: int) -> Phase:
        phase = await self._get_phase(phase_id, project_id)
        async with transaction(self.session):
            await self.phase_repo.set_flags(phase, is_active=False, is_completed=True)
        logger.info("Phase completed", project_id=project_id, phase_id=phase_id)
        return phase

    async def reopen_phase(self, project_id: int, phase_id: int) -> Phase:
        phase = await self._get_phase(phase_id, project_id)
        async with transaction(self.session):
            await self.phase_repo.set_flags(phase, is_active=False, is_completed=False)
        logger.info("Phase reopened", project_id=project_id, phase_id=phase_id)
        return phase

    async def reorder_phases(self, ordered_phase_ids: Any, project_id: int | None = None) -> None:
        """Renumber phases 1..N in the given sequence.

        With `project_id`, the IDs must be exactly the project's phases.
        Without it, only the payload shape is checked and unknown IDs are
        ignored.

        Raises:
            ValidationError: Malformed payload, or not the project's full phase set
            NotFoundError: Project or one of the phases does not exist
            OwnershipError: A phase belongs to another project
        """
        phase_ids = coerce_phase_ids(ordered_phase_ids)

        if project_id is not None:
            await self._check_full_phase_set(project_id, phase_ids)

        async with transaction(self.session):
            for index, phase_id in enumerate(phase_ids):
                await self.phase_repo.set_order(phase_id, index + 1)

        logger.info("Phases reordered", project_id=project_id, count=len(phase_ids))

    async def _check_full_phase_set(self, project_id: int, phase_ids: list[int]) -> None:
        await self._require_project(project_id)

        found = {phase.id: phase for phase in await self.phase_repo.list_by_ids(phase_ids)}
        if any(phase_id not in found for phase_id in phase_ids):
            raise NotFoundError("Phase not found")
        if any(phase.project_id != project_id for phase in found.values()):
            raise OwnershipError()

        project_phase_ids = {phase.id for phase in await self.phase_repo.list_by_project(project_id)}
        if project_phase_ids != set(phase_ids):
            raise ValidationError("orderedPhaseIds must list every phase of the project")

    async def update_phase(
        self,
        phase_id: int,
        changes: dict[str, Any],
        project_id: int | None = None,
    ) -> Phase:
        """Update name, description and estimated completion date.

        `changes` holds only the fields the caller supplied. An absent
        `estimated_completion_at` leaves the date untouched; an explicit None
        clears it.
        """
        name = _require_name(changes.get("name"))
        phase = await self._get_phase(phase_id, project_id)

        phase.name = name
        if "description" in changes:
            phase.description = changes["description"]
        if "estimated_completion_at" in changes:
            phase.estimated_completion_at = changes["estimated_completion_at"]
        phase.updated_at = utc_now()

        async with transaction(self.session):
            self.phase_repo.add(phase)
            await self.session.flush()

        logger.info("Phase updated", phase_id=phase_id, fields=sorted(changes))
        return phase

    async def delete_phase(self, phase_id: int, project_id: int | None = None) -> None:
        """Delete a phase. Remaining phases keep their order values."""
        phase = await self._get_phase(phase_id, project_id)
        async with transaction(self.session):
            await self.phase_repo.delete(phase)
        logger.info("Phase deleted", project_id=phase.project_id, phase_id=phase_id)
