"""Repositories for Admin and AdminVerificationCode."""

from datetime import datetime

from sqlmodel import select

from src.phasetracker.models import Admin, AdminVerificationCode
from src.phasetracker.models.base import utc_now
from src.phasetracker.repositories.base import BaseRepository


class AdminRepository(BaseRepository[Admin]):
    """Repository for Admin entity."""

    model = Admin

    async def get_by_email(self, email: str) -> Admin | None:
        """Get admin by email address."""
        result = await self.session.execute(select(Admin).where(Admin.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if an admin with the given email exists."""
        admin = await self.get_by_email(email)
        return admin is not None

    async def mark_verified(self, admin: Admin) -> Admin:
        admin.is_verified = True
        admin.updated_at = utc_now()
        self.session.add(admin)
        await self.session.flush()
        return admin


class AdminVerificationCodeRepository(BaseRepository[AdminVerificationCode]):
    """Repository for admin signup verification codes."""

    model = AdminVerificationCode

    async def create_code(
        self, admin_id: int, code: str, expires_at: datetime
    ) -> AdminVerificationCode:
        return await self.create(
            AdminVerificationCode(admin_id=admin_id, code=code, expires_at=expires_at)
        )

    async def get_by_admin_and_code(self, admin_id: int, code: str) -> AdminVerificationCode | None:
        """Get the code row matching this admin and exact code value.

        Older codes for the same admin are not invalidated; the newest
        matching row wins if a value was ever issued twice.
        """
        result = await self.session.execute(
            select(AdminVerificationCode)
            .where(
                AdminVerificationCode.admin_id == admin_id,
                AdminVerificationCode.code == code,
            )
            .order_by(AdminVerificationCode.id.desc())  # type: ignore[union-attr]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def mark_used(self, code: AdminVerificationCode) -> AdminVerificationCode:
        """Mark a code as used."""
        code.used_at = utc_now()
        self.session.add(code)
        await self.session.flush()
        return code
