"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import AdminFactory, PhaseFactory, ...
"""

from tests.factories.admin import (
    DEFAULT_TEST_PASSWORD,
    AdminFactory,
    AdminVerificationCodeFactory,
)
from tests.factories.base import BaseFactory
from tests.factories.client import ClientFactory, ClientVerificationCodeFactory
from tests.factories.project import PhaseFactory, ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    # Admin
    "AdminFactory",
    "AdminVerificationCodeFactory",
    "DEFAULT_TEST_PASSWORD",
    # Client
    "ClientFactory",
    "ClientVerificationCodeFactory",
    # Project
    "PhaseFactory",
    "ProjectFactory",
]
