"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.phasetracker.api.dependencies.auth import (
    CurrentAdmin,
    CurrentClient,
    get_current_admin,
    get_current_client,
)

# Database
from src.phasetracker.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.phasetracker.api.dependencies.repositories import (
    AdminCodeRepo,
    AdminRepo,
    ClientCodeRepo,
    ClientRepo,
    PhaseRepo,
    ProjectClientRepo,
    ProjectRepo,
)

# Services
from src.phasetracker.api.dependencies.services import (
    AuthServiceDep,
    ClientServiceDep,
    ClientViewServiceDep,
    PhaseServiceDep,
    ProjectServiceDep,
    get_auth_service,
    get_client_service,
    get_client_view_service,
    get_phase_service,
    get_project_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "CurrentAdmin",
    "CurrentClient",
    "get_current_admin",
    "get_current_client",
    # Repositories
    "AdminCodeRepo",
    "AdminRepo",
    "ClientCodeRepo",
    "ClientRepo",
    "PhaseRepo",
    "ProjectClientRepo",
    "ProjectRepo",
    # Services
    "AuthServiceDep",
    "ClientServiceDep",
    "ClientViewServiceDep",
    "PhaseServiceDep",
    "ProjectServiceDep",
    "get_auth_service",
    "get_client_service",
    "get_client_view_service",
    "get_phase_service",
    "get_project_service",
]
