"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.phasetracker.api.dependencies.db import DBSession
from src.phasetracker.api.dependencies.repositories import (
    AdminCodeRepo,
    AdminRepo,
    ClientCodeRepo,
    ClientRepo,
    PhaseRepo,
    ProjectClientRepo,
    ProjectRepo,
)
from src.phasetracker.services import (
    AuthService,
    ClientService,
    ClientViewService,
    PhaseService,
    ProjectService,
)


def get_auth_service(
    admin_repo: AdminRepo,
    admin_code_repo: AdminCodeRepo,
    client_repo: ClientRepo,
    client_code_repo: ClientCodeRepo,
    session: DBSession,
) -> AuthService:
    return AuthService(admin_repo, admin_code_repo, client_repo, client_code_repo, session)


def get_phase_service(
    phase_repo: PhaseRepo,
    project_repo: ProjectRepo,
    session: DBSession,
) -> PhaseService:
    return PhaseService(phase_repo, project_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    phase_repo: PhaseRepo,
    client_repo: ClientRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, phase_repo, client_repo, session)


def get_client_service(
    client_repo: ClientRepo,
    project_client_repo: ProjectClientRepo,
    project_repo: ProjectRepo,
    session: DBSession,
) -> ClientService:
    return ClientService(client_repo, project_client_repo, project_repo, session)


def get_client_view_service(
    project_repo: ProjectRepo,
    phase_repo: PhaseRepo,
    project_client_repo: ProjectClientRepo,
    session: DBSession,
) -> ClientViewService:
    """Get the read-only service behind the client portal."""
    return ClientViewService(project_repo, phase_repo, project_client_repo, session)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
PhaseServiceDep = Annotated[PhaseService, Depends(get_phase_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]
ClientViewServiceDep = Annotated[ClientViewService, Depends(get_client_view_service)]
