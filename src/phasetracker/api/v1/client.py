"""Client portal endpoints - read-only view of assigned Active projects."""

from fastapi import APIRouter

from src.phasetracker.api.dependencies import ClientViewServiceDep, CurrentClient
from src.phasetracker.schemas.phase import PhaseRead
from src.phasetracker.schemas.project import ClientProjectDetailRead, ClientProjectRead

router = APIRouter(prefix="/client", tags=["client"])


@router.get("/projects", response_model=list[ClientProjectRead])
async def list_client_projects(
    service: ClientViewServiceDep,
    client: CurrentClient,
) -> list[ClientProjectRead]:
    assert client.id is not None
    projects = await service.list_projects(client.id)
    return [ClientProjectRead.model_validate(p) for p in projects]


@router.get(
    "/projects/{project_id}",
    response_model=ClientProjectDetailRead,
    responses={
        403: {"description": "Not assigned to this project, or project not active"},
        404: {"description": "Project not found"},
    },
)
async def get_client_project(
    project_id: int,
    service: ClientViewServiceDep,
    client: CurrentClient,
) -> ClientProjectDetailRead:
    """Project timeline for an assigned client."""
    assert client.id is not None
    project, phases = await service.get_project(client.id, project_id)
    return ClientProjectDetailRead(
        **ClientProjectRead.model_validate(project).model_dump(),
        phases=[PhaseRead.model_validate(p) for p in phases],
    )
