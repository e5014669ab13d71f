"""Model exports.

Import from here: `from src.phasetracker.models import Admin, Phase`
"""

from src.phasetracker.models.admin import Admin, AdminVerificationCode
from src.phasetracker.models.client import Client, ClientVerificationCode, ProjectClient
from src.phasetracker.models.enums import PhaseStatus, ProjectStatus
from src.phasetracker.models.project import Phase, Project

__all__ = [
    # Enums
    "PhaseStatus",
    "ProjectStatus",
    # Credential store
    "Admin",
    "AdminVerificationCode",
    "Client",
    "ClientVerificationCode",
    # Projects
    "Phase",
    "Project",
    "ProjectClient",
]
