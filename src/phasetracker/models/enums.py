"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status. Clients only see Active projects."""

    ACTIVE = "Active"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"


class PhaseStatus(str, Enum):
    """Phase lifecycle state, derived from the is_active / is_completed flags."""

    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
