"""Tests for the phase lifecycle engine.

Covers activation cascading, completion and reopening, reordering and the
ownership checks shared by every phase operation.
"""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.phasetracker.core.exceptions import (
    NotFoundError,
    OwnershipError,
    StorageError,
    ValidationError,
)
from src.phasetracker.models import Phase, PhaseStatus, Project
from src.phasetracker.repositories import PhaseRepository
from src.phasetracker.services import PhaseService
from tests.factories import PhaseFactory, ProjectFactory

pytestmark = pytest.mark.integration


async def _states(db_session: AsyncSession, project_id: int) -> dict[str, PhaseStatus]:
    """Phase name -> status, read fresh from the database."""
    result = await db_session.execute(
        select(Phase)
        .where(Phase.project_id == project_id)
        .execution_options(populate_existing=True)
    )
    return {p.name: p.status for p in result.scalars().all()}


async def _orders(db_session: AsyncSession, project_id: int) -> dict[int, int]:
    result = await db_session.execute(
        select(Phase)
        .where(Phase.project_id == project_id)
        .execution_options(populate_existing=True)
    )
    return {p.id: p.order for p in result.scalars().all()}  # type: ignore[misc]


@pytest.fixture
async def other_project(db_session: AsyncSession) -> Project:
    project = ProjectFactory.build()
    db_session.add(project)
    await db_session.commit()
    await db_session.refresh(project)
    return project


@pytest.fixture
async def other_phase(db_session: AsyncSession, other_project: Project) -> Phase:
    phase = PhaseFactory.build(project_id=other_project.id, name="Elsewhere", order=1)
    db_session.add(phase)
    await db_session.commit()
    await db_session.refresh(phase)
    return phase


class TestAddPhase:
    async def test_orders_are_sequential(self, phase_service: PhaseService, test_project):
        first = await phase_service.add_phase(test_project.id, "Design")
        second = await phase_service.add_phase(test_project.id, "Build", "Write the code")

        assert (first.order, second.order) == (1, 2)
        assert second.description == "Write the code"
        assert second.status is PhaseStatus.PENDING

    async def test_appends_after_highest_order(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        await phase_service.delete_phase(test_phases[1].id, test_project.id)
        phase = await phase_service.add_phase(test_project.id, "Launch")
        assert phase.order == 4

    async def test_name_is_trimmed(self, phase_service: PhaseService, test_project):
        phase = await phase_service.add_phase(test_project.id, "  Design  ")
        assert phase.name == "Design"

    @pytest.mark.parametrize("name", [None, "", "   "])
    async def test_name_required(self, phase_service: PhaseService, test_project, name):
        with pytest.raises(ValidationError, match="Phase name is required"):
            await phase_service.add_phase(test_project.id, name)

    async def test_unknown_project(self, phase_service: PhaseService):
        with pytest.raises(NotFoundError, match="Project not found"):
            await phase_service.add_phase(9999, "Design")


class TestSetActivePhase:
    async def test_activation_completes_earlier_phases(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        """Activating phase 2 completes 1, then activating 3 completes 2."""
        p1, p2, p3 = test_phases

        await phase_service.set_active_phase(test_project.id, p2.id)
        assert await _states(db_session, test_project.id) == {
            "Phase 1": PhaseStatus.COMPLETED,
            "Phase 2": PhaseStatus.ACTIVE,
            "Phase 3": PhaseStatus.PENDING,
        }

        await phase_service.set_active_phase(test_project.id, p3.id)
        assert await _states(db_session, test_project.id) == {
            "Phase 1": PhaseStatus.COMPLETED,
            "Phase 2": PhaseStatus.COMPLETED,
            "Phase 3": PhaseStatus.ACTIVE,
        }

    async def test_moving_back_keeps_later_completion(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, _, p3 = test_phases
        await phase_service.set_active_phase(test_project.id, p3.id)
        await phase_service.set_active_phase(test_project.id, p1.id)

        assert await _states(db_session, test_project.id) == {
            "Phase 1": PhaseStatus.ACTIVE,
            "Phase 2": PhaseStatus.COMPLETED,
            "Phase 3": PhaseStatus.PENDING,
        }

    async def test_activating_completed_phase_clears_completion(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        p1 = test_phases[0]
        await phase_service.set_phase_complete(test_project.id, p1.id)

        phase = await phase_service.set_active_phase(test_project.id, p1.id)
        assert phase.is_active is True
        assert phase.is_completed is False

    async def test_at_most_one_active(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        for phase in (test_phases[2], test_phases[0], test_phases[1]):
            await phase_service.set_active_phase(test_project.id, phase.id)
            states = await _states(db_session, test_project.id)
            assert list(states.values()).count(PhaseStatus.ACTIVE) == 1
            phases = await phase_service.list_phases(test_project.id)
            assert not any(p.is_active and p.is_completed for p in phases)

    async def test_phase_from_other_project(
        self, phase_service: PhaseService, test_project, test_phases, other_phase
    ):
        with pytest.raises(OwnershipError):
            await phase_service.set_active_phase(test_project.id, other_phase.id)

    async def test_unknown_phase(self, phase_service: PhaseService, test_project):
        with pytest.raises(NotFoundError, match="Phase not found"):
            await phase_service.set_active_phase(test_project.id, 9999)

    async def test_failed_activation_rolls_back(
        self,
        phase_service: PhaseService,
        db_session,
        test_project,
        test_phases,
        monkeypatch: pytest.MonkeyPatch,
    ):
        project_id = test_project.id
        first_id, last_id = test_phases[0].id, test_phases[2].id
        await phase_service.set_active_phase(project_id, first_id)
        before = await _states(db_session, project_id)

        async def failing_activate(self, project_id: int, phase_id: int) -> None:
            raise OperationalError("UPDATE phases", {}, Exception("disk I/O error"))

        monkeypatch.setattr(PhaseRepository, "activate", failing_activate)

        with pytest.raises(StorageError):
            await phase_service.set_active_phase(project_id, last_id)

        after = await _states(db_session, project_id)
        assert after == before
        assert list(after.values()).count(PhaseStatus.ACTIVE) == 1


class TestCompleteAndReopen:
    async def test_complete_active_phase(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        p2 = test_phases[1]
        await phase_service.set_active_phase(test_project.id, p2.id)

        phase = await phase_service.set_phase_complete(test_project.id, p2.id)
        assert phase.status is PhaseStatus.COMPLETED

        phases = await phase_service.list_phases(test_project.id)
        assert not any(p.is_active for p in phases)

    async def test_complete_does_not_touch_other_phases(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        await phase_service.set_phase_complete(test_project.id, test_phases[2].id)
        assert await _states(db_session, test_project.id) == {
            "Phase 1": PhaseStatus.PENDING,
            "Phase 2": PhaseStatus.PENDING,
            "Phase 3": PhaseStatus.COMPLETED,
        }

    async def test_reopen_returns_phase_to_pending(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        p1 = test_phases[0]
        await phase_service.set_phase_complete(test_project.id, p1.id)

        phase = await phase_service.reopen_phase(test_project.id, p1.id)
        assert phase.status is PhaseStatus.PENDING

    async def test_reopen_active_phase_deactivates_it(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        p1 = test_phases[0]
        await phase_service.set_active_phase(test_project.id, p1.id)

        phase = await phase_service.reopen_phase(test_project.id, p1.id)
        assert phase.is_active is False
        assert phase.is_completed is False

    async def test_other_project_rejected(
        self, phase_service: PhaseService, test_project, other_phase
    ):
        with pytest.raises(OwnershipError):
            await phase_service.set_phase_complete(test_project.id, other_phase.id)
        with pytest.raises(OwnershipError):
            await phase_service.reopen_phase(test_project.id, other_phase.id)


class TestReorderPhases:
    async def test_reorder_assigns_positions(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, p2, p3 = test_phases
        await phase_service.reorder_phases([p3.id, p1.id, p2.id], project_id=test_project.id)

        assert await _orders(db_session, test_project.id) == {p3.id: 1, p1.id: 2, p2.id: 3}

        phases = await phase_service.list_phases(test_project.id)
        assert [p.id for p in phases] == [p3.id, p1.id, p2.id]

    async def test_reorder_keeps_lifecycle_flags(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, p2, p3 = test_phases
        await phase_service.set_active_phase(test_project.id, p2.id)
        await phase_service.reorder_phases([p2.id, p3.id, p1.id], project_id=test_project.id)

        assert await _states(db_session, test_project.id) == {
            "Phase 1": PhaseStatus.COMPLETED,
            "Phase 2": PhaseStatus.ACTIVE,
            "Phase 3": PhaseStatus.PENDING,
        }

    async def test_duplicates_leave_orders_unchanged(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, p2, p3 = test_phases
        with pytest.raises(ValidationError):
            await phase_service.reorder_phases([p2.id, p2.id, p1.id], project_id=test_project.id)

        assert await _orders(db_session, test_project.id) == {p1.id: 1, p2.id: 2, p3.id: 3}

    async def test_partial_list_rejected(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, p2, p3 = test_phases
        with pytest.raises(ValidationError, match="every phase"):
            await phase_service.reorder_phases([p2.id, p1.id], project_id=test_project.id)

        assert await _orders(db_session, test_project.id) == {p1.id: 1, p2.id: 2, p3.id: 3}

    async def test_foreign_phase_rejected(
        self, phase_service: PhaseService, test_project, test_phases, other_phase
    ):
        ids = [p.id for p in test_phases] + [other_phase.id]
        with pytest.raises(OwnershipError):
            await phase_service.reorder_phases(ids, project_id=test_project.id)

    async def test_unknown_phase_rejected(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        ids = [p.id for p in test_phases] + [9999]
        with pytest.raises(NotFoundError):
            await phase_service.reorder_phases(ids, project_id=test_project.id)

    async def test_unknown_project_rejected(self, phase_service: PhaseService, test_phases):
        with pytest.raises(NotFoundError, match="Project not found"):
            await phase_service.reorder_phases([p.id for p in test_phases], project_id=9999)

    async def test_without_project_unknown_ids_are_ignored(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, p2, p3 = test_phases
        await phase_service.reorder_phases([p3.id, 9999, p1.id])

        orders = await _orders(db_session, test_project.id)
        assert orders[p3.id] == 1
        assert orders[p1.id] == 3
        assert orders[p2.id] == 2

    async def test_string_ids_accepted(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, p2, p3 = test_phases
        await phase_service.reorder_phases(
            [str(p2.id), str(p3.id), str(p1.id)], project_id=test_project.id
        )
        assert await _orders(db_session, test_project.id) == {p2.id: 1, p3.id: 2, p1.id: 3}

    async def test_failed_reorder_rolls_back(
        self,
        phase_service: PhaseService,
        db_session,
        test_project,
        test_phases,
        monkeypatch: pytest.MonkeyPatch,
    ):
        project_id = test_project.id
        p1, p2, p3 = (p.id for p in test_phases)
        original_set_order = PhaseRepository.set_order
        calls = []

        async def set_order_failing_second(self, phase_id: int, order: int) -> None:
            calls.append(phase_id)
            if len(calls) == 2:
                raise OperationalError("UPDATE phases", {}, Exception("disk I/O error"))
            await original_set_order(self, phase_id, order)

        monkeypatch.setattr(PhaseRepository, "set_order", set_order_failing_second)

        with pytest.raises(StorageError):
            await phase_service.reorder_phases([p3, p1, p2], project_id=project_id)

        assert calls == [p3, p1]
        assert await _orders(db_session, project_id) == {p1: 1, p2: 2, p3: 3}


class TestUpdatePhase:
    async def test_update_fields(self, phase_service: PhaseService, test_project, test_phases):
        phase = await phase_service.update_phase(
            test_phases[0].id,
            {
                "name": "Discovery",
                "description": "Kickoff and research",
                "estimated_completion_at": date(2025, 3, 1),
            },
            project_id=test_project.id,
        )
        assert phase.name == "Discovery"
        assert phase.description == "Kickoff and research"
        assert phase.estimated_completion_at == date(2025, 3, 1)

    async def test_omitted_date_is_left_alone(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        phase_id = test_phases[0].id
        await phase_service.update_phase(
            phase_id, {"name": "A", "estimated_completion_at": date(2025, 3, 1)}
        )

        phase = await phase_service.update_phase(phase_id, {"name": "B"})
        assert phase.estimated_completion_at == date(2025, 3, 1)

    async def test_explicit_none_clears_date(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        phase_id = test_phases[0].id
        await phase_service.update_phase(
            phase_id, {"name": "A", "estimated_completion_at": date(2025, 3, 1)}
        )

        phase = await phase_service.update_phase(
            phase_id, {"name": "A", "estimated_completion_at": None}
        )
        assert phase.estimated_completion_at is None

    async def test_update_keeps_order_and_flags(
        self, phase_service: PhaseService, test_project, test_phases
    ):
        p2 = test_phases[1]
        await phase_service.set_active_phase(test_project.id, p2.id)

        phase = await phase_service.update_phase(p2.id, {"name": "Renamed"})
        assert phase.order == 2
        assert phase.status is PhaseStatus.ACTIVE

    async def test_name_required(self, phase_service: PhaseService, test_phases):
        with pytest.raises(ValidationError, match="Phase name is required"):
            await phase_service.update_phase(test_phases[0].id, {"description": "x"})

    async def test_other_project_rejected(
        self, phase_service: PhaseService, test_project, other_phase
    ):
        with pytest.raises(OwnershipError):
            await phase_service.update_phase(
                other_phase.id, {"name": "Nope"}, project_id=test_project.id
            )


class TestDeletePhase:
    async def test_delete_does_not_renumber(
        self, phase_service: PhaseService, db_session, test_project, test_phases
    ):
        p1, p2, p3 = test_phases
        await phase_service.delete_phase(p2.id, project_id=test_project.id)

        assert await _orders(db_session, test_project.id) == {p1.id: 1, p3.id: 3}

    async def test_unknown_phase(self, phase_service: PhaseService):
        with pytest.raises(NotFoundError):
            await phase_service.delete_phase(9999)

    async def test_other_project_rejected(
        self, phase_service: PhaseService, test_project, other_phase
    ):
        with pytest.raises(OwnershipError):
            await phase_service.delete_phase(other_phase.id, project_id=test_project.id)
