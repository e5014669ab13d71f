from src.phasetracker.schemas.auth import (
    AdminSignupRequest,
    ClientCodeRequest,
    LoginRequest,
    MessageResponse,
    TokenResponse,
    VerifyCodeRequest,
)
from src.phasetracker.schemas.client import ClientAssignRequest, ClientAssignResponse, ClientRead
from src.phasetracker.schemas.phase import PhaseCreate, PhaseRead, PhaseUpdate, ReorderRequest
from src.phasetracker.schemas.project import (
    ClientProjectDetailRead,
    ClientProjectRead,
    ProjectCreate,
    ProjectDetailRead,
    ProjectRead,
    ProjectSummaryRead,
    ProjectUpdate,
)

__all__ = [
    # Auth
    "AdminSignupRequest",
    "ClientCodeRequest",
    "LoginRequest",
    "MessageResponse",
    "TokenResponse",
    "VerifyCodeRequest",
    # Client
    "ClientAssignRequest",
    "ClientAssignResponse",
    "ClientRead",
    # Phase
    "PhaseCreate",
    "PhaseRead",
    "PhaseUpdate",
    "ReorderRequest",
    # Project
    "ClientProjectDetailRead",
    "ClientProjectRead",
    "ProjectCreate",
    "ProjectDetailRead",
    "ProjectRead",
    "ProjectSummaryRead",
    "ProjectUpdate",
]
