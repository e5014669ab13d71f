"""Admin accounts and their signup verification codes."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from src.phasetracker.models.base import utc_now


class Admin(SQLModel, table=True):
    """Admin account. Created unverified; verified exactly once by code redemption."""

    __tablename__ = "admins"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    first_name: str = Field(max_length=100)
    last_name: str = Field(max_length=100)
    is_verified: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())


class AdminVerificationCode(SQLModel, table=True):
    """One-time code proving control of an admin's email address."""

    __tablename__ = "admin_codes"

    id: int | None = Field(default=None, primary_key=True)
    admin_id: int = Field(foreign_key="admins.id", ondelete="CASCADE", index=True)
    code: str = Field(max_length=6)
    expires_at: datetime = Field(sa_type=DateTime())
    used_at: datetime | None = Field(default=None, sa_type=DateTime())
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
