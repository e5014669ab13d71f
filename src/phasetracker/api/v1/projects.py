"""Admin project endpoints - projects, their phases and client assignments."""

from fastapi import APIRouter, Response, status

from src.phasetracker.api.dependencies import (
    ClientServiceDep,
    CurrentAdmin,
    PhaseServiceDep,
    ProjectServiceDep,
)
from src.phasetracker.schemas.client import (
    ClientAssignRequest,
    ClientAssignResponse,
    ClientRead,
)
from src.phasetracker.schemas.phase import PhaseCreate, PhaseRead, PhaseUpdate, ReorderRequest
from src.phasetracker.schemas.project import (
    ProjectCreate,
    ProjectDetailRead,
    ProjectRead,
    ProjectSummaryRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


# Projects


@router.get("", response_model=list[ProjectSummaryRead], summary="List projects")
async def list_projects(service: ProjectServiceDep, _admin: CurrentAdmin) -> list[ProjectSummaryRead]:
    """List all projects, newest first, with client and phase counts."""
    summaries = await service.list_projects()
    return [
        ProjectSummaryRead(
            **ProjectRead.model_validate(s.project).model_dump(),
            client_count=s.counts.client_count,
            phases_count=s.counts.phases_count,
            phases_completed_count=s.counts.phases_completed_count,
        )
        for s in summaries
    ]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
)
async def create_project(
    data: ProjectCreate,
    service: ProjectServiceDep,
    admin: CurrentAdmin,
) -> ProjectRead:
    project = await service.create_project(
        data.name,
        description=data.description,
        status=data.status.value,
        admin_id=admin.id,
    )
    return ProjectRead.model_validate(project)


@router.get(
    "/{project_id}",
    response_model=ProjectDetailRead,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: int,
    service: ProjectServiceDep,
    _admin: CurrentAdmin,
) -> ProjectDetailRead:
    """Get a project with its phases and assigned clients."""
    details = await service.get_project_details(project_id)
    return ProjectDetailRead(
        **ProjectRead.model_validate(details.project).model_dump(),
        phases=[PhaseRead.model_validate(p) for p in details.phases],
        clients=[ClientRead.model_validate(c) for c in details.clients],
    )


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    responses={404: {"description": "Project not found"}},
)
async def update_project(
    project_id: int,
    data: ProjectUpdate,
    service: ProjectServiceDep,
    _admin: CurrentAdmin,
) -> ProjectRead:
    changes = data.model_dump(exclude_unset=True, mode="json")
    project = await service.update_project(project_id, changes)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    responses={404: {"description": "Project not found"}},
)
async def delete_project(
    project_id: int,
    service: ProjectServiceDep,
    _admin: CurrentAdmin,
) -> Response:
    """Delete a project. Its phases and client assignments are removed with it."""
    await service.delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Phases


@router.get(
    "/{project_id}/phases",
    response_model=list[PhaseRead],
    summary="List phases",
    responses={404: {"description": "Project not found"}},
)
async def list_phases(
    project_id: int,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> list[PhaseRead]:
    phases = await service.list_phases(project_id)
    return [PhaseRead.model_validate(p) for p in phases]


@router.post(
    "/{project_id}/phases",
    response_model=PhaseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add phase",
    responses={
        400: {"description": "Phase name is required"},
        404: {"description": "Project not found"},
    },
)
async def add_phase(
    project_id: int,
    data: PhaseCreate,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> PhaseRead:
    """Append a pending phase at the end of the project."""
    phase = await service.add_phase(project_id, data.name, data.description)
    return PhaseRead.model_validate(phase)


# Declared before /{phase_id} routes so "reorder" is not parsed as a phase ID
@router.put(
    "/{project_id}/phases/reorder",
    response_model=list[PhaseRead],
    summary="Reorder phases",
    responses={
        400: {"description": "Malformed list, or not every phase of the project"},
        404: {"description": "Project or phase not found"},
    },
)
async def reorder_phases(
    project_id: int,
    data: ReorderRequest,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> list[PhaseRead]:
    """Renumber the project's phases 1..N in the given order."""
    await service.reorder_phases(data.ordered_phase_ids, project_id=project_id)
    phases = await service.list_phases(project_id)
    return [PhaseRead.model_validate(p) for p in phases]


@router.post(
    "/{project_id}/phases/{phase_id}/set-active",
    response_model=list[PhaseRead],
    summary="Set active phase",
    responses={
        400: {"description": "Phase belongs to another project"},
        404: {"description": "Phase not found"},
    },
)
async def set_active_phase(
    project_id: int,
    phase_id: int,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> list[PhaseRead]:
    """Activate a phase, completing every phase before it.

    Returns the project's phases after the transition.
    """
    await service.set_active_phase(project_id, phase_id)
    phases = await service.list_phases(project_id)
    return [PhaseRead.model_validate(p) for p in phases]


@router.post(
    "/{project_id}/phases/{phase_id}/complete",
    response_model=PhaseRead,
    summary="Complete phase",
    responses={
        400: {"description": "Phase belongs to another project"},
        404: {"description": "Phase not found"},
    },
)
async def complete_phase(
    project_id: int,
    phase_id: int,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> PhaseRead:
    phase = await service.set_phase_complete(project_id, phase_id)
    return PhaseRead.model_validate(phase)


@router.post(
    "/{project_id}/phases/{phase_id}/reopen",
    response_model=PhaseRead,
    summary="Reopen phase",
    responses={
        400: {"description": "Phase belongs to another project"},
        404: {"description": "Phase not found"},
    },
)
async def reopen_phase(
    project_id: int,
    phase_id: int,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> PhaseRead:
    phase = await service.reopen_phase(project_id, phase_id)
    return PhaseRead.model_validate(phase)


@router.put(
    "/{project_id}/phases/{phase_id}",
    response_model=PhaseRead,
    summary="Update phase",
    responses={
        400: {"description": "Phase name is required, or phase belongs to another project"},
        404: {"description": "Phase not found"},
    },
)
async def update_phase(
    project_id: int,
    phase_id: int,
    data: PhaseUpdate,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> PhaseRead:
    """Update a phase. An omitted estimatedCompletionAt is left as is; null clears it."""
    phase = await service.update_phase(
        phase_id, data.model_dump(exclude_unset=True), project_id=project_id
    )
    return PhaseRead.model_validate(phase)


@router.delete(
    "/{project_id}/phases/{phase_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete phase",
    responses={
        400: {"description": "Phase belongs to another project"},
        404: {"description": "Phase not found"},
    },
)
async def delete_phase(
    project_id: int,
    phase_id: int,
    service: PhaseServiceDep,
    _admin: CurrentAdmin,
) -> Response:
    await service.delete_phase(phase_id, project_id=project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Clients


@router.post(
    "/{project_id}/clients",
    response_model=ClientAssignResponse,
    summary="Assign client",
    responses={404: {"description": "Project not found"}},
)
async def assign_client(
    project_id: int,
    data: ClientAssignRequest,
    service: ClientServiceDep,
    _admin: CurrentAdmin,
) -> ClientAssignResponse:
    """Assign a client by email, creating the client on first use."""
    client, newly_assigned = await service.assign_client(project_id, data.email)
    return ClientAssignResponse(
        client=ClientRead.model_validate(client),
        newly_assigned=newly_assigned,
    )


@router.delete(
    "/{project_id}/clients/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove client",
)
async def remove_client(
    project_id: int,
    client_id: int,
    service: ClientServiceDep,
    _admin: CurrentAdmin,
) -> Response:
    await service.remove_client(project_id, client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
