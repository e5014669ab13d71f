"""Repository layer - data access abstraction."""

from src.phasetracker.repositories.admin import AdminRepository, AdminVerificationCodeRepository
from src.phasetracker.repositories.base import BaseRepository
from src.phasetracker.repositories.client import (
    ClientRepository,
    ClientVerificationCodeRepository,
    ProjectClientRepository,
)
from src.phasetracker.repositories.phase import PhaseRepository
from src.phasetracker.repositories.project import ProjectCounts, ProjectRepository

__all__ = [
    # Base
    "BaseRepository",
    # Credential store
    "AdminRepository",
    "AdminVerificationCodeRepository",
    "ClientRepository",
    "ClientVerificationCodeRepository",
    # Projects
    "PhaseRepository",
    "ProjectClientRepository",
    "ProjectCounts",
    "ProjectRepository",
]
