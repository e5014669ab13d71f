"""Notification utilities - email."""

from src.phasetracker.core.notifications.email import (
    send_project_assignment_email,
    send_verification_code_email,
)

__all__ = [
    "send_project_assignment_email",
    "send_verification_code_email",
]
