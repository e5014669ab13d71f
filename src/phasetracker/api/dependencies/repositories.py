"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.phasetracker.api.dependencies.db import DBSession
from src.phasetracker.repositories import (
    AdminRepository,
    AdminVerificationCodeRepository,
    ClientRepository,
    ClientVerificationCodeRepository,
    PhaseRepository,
    ProjectClientRepository,
    ProjectRepository,
)


def get_admin_repository(session: DBSession) -> AdminRepository:
    return AdminRepository(session)


def get_admin_code_repository(session: DBSession) -> AdminVerificationCodeRepository:
    return AdminVerificationCodeRepository(session)


def get_client_repository(session: DBSession) -> ClientRepository:
    return ClientRepository(session)


def get_client_code_repository(session: DBSession) -> ClientVerificationCodeRepository:
    return ClientVerificationCodeRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_phase_repository(session: DBSession) -> PhaseRepository:
    return PhaseRepository(session)


def get_project_client_repository(session: DBSession) -> ProjectClientRepository:
    return ProjectClientRepository(session)


AdminRepo = Annotated[AdminRepository, Depends(get_admin_repository)]
AdminCodeRepo = Annotated[AdminVerificationCodeRepository, Depends(get_admin_code_repository)]
ClientRepo = Annotated[ClientRepository, Depends(get_client_repository)]
ClientCodeRepo = Annotated[ClientVerificationCodeRepository, Depends(get_client_code_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
PhaseRepo = Annotated[PhaseRepository, Depends(get_phase_repository)]
ProjectClientRepo = Annotated[ProjectClientRepository, Depends(get_project_client_repository)]
