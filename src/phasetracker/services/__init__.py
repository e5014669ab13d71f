from src.phasetracker.services.auth_service import AuthService
from src.phasetracker.services.client_service import ClientService
from src.phasetracker.services.client_view_service import ClientViewService
from src.phasetracker.services.phase_service import PhaseService
from src.phasetracker.services.project_service import (
    ProjectDetails,
    ProjectService,
    ProjectSummary,
)

__all__ = [
    "AuthService",
    "ClientService",
    "ClientViewService",
    "PhaseService",
    "ProjectDetails",
    "ProjectService",
    "ProjectSummary",
]
