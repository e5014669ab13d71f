"""Authentication service - admin signup/verification/login and client code login."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.phasetracker.core.config import get_settings
from src.phasetracker.core.db import transaction
from src.phasetracker.core.exceptions import (
    AccountNotFoundError,
    AlreadyVerifiedError,
    CodeAlreadyUsedError,
    ConflictError,
    ExpiredCodeError,
    InvalidCodeError,
    InvalidCredentialsError,
    UnverifiedAccountError,
)
from src.phasetracker.core.logging import get_logger
from src.phasetracker.core.notifications import send_verification_code_email
from src.phasetracker.core.security import (
    create_admin_login_token,
    create_admin_verified_token,
    create_client_token,
    get_dummy_password_hash,
    hash_password,
    issue_code,
    verify_password,
)
from src.phasetracker.models import Admin, AdminVerificationCode, ClientVerificationCode
from src.phasetracker.models.base import utc_now
from src.phasetracker.repositories import (
    AdminRepository,
    AdminVerificationCodeRepository,
    ClientRepository,
    ClientVerificationCodeRepository,
)

logger = get_logger(__name__)


def _is_expired(record: AdminVerificationCode | ClientVerificationCode) -> bool:
    return utc_now() >= record.expires_at


class AuthService:
    """Authentication service for both principals.

    Admins sign up with a password and confirm their email with a one-time
    code before they can log in. Clients never hold a password: every login
    is a fresh code sent to their email.
    """

    def __init__(
        self,
        admin_repo: AdminRepository,
        admin_code_repo: AdminVerificationCodeRepository,
        client_repo: ClientRepository,
        client_code_repo: ClientVerificationCodeRepository,
        session: AsyncSession,
    ):
        self.admin_repo = admin_repo
        self.admin_code_repo = admin_code_repo
        self.client_repo = client_repo
        self.client_code_repo = client_code_repo
        self.session = session

    def _email_for_log(self, email: str) -> str | None:
        return email if get_settings().log_user_emails else None

    async def signup_admin(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> Admin:
        """Create an unverified admin and email them a verification code.

        Raises:
            ConflictError: If an admin with this email already exists,
                verified or not
        """
        if await self.admin_repo.exists_by_email(email):
            raise ConflictError("Email already registered")

        password_hash = hash_password(password)
        code, expires_at = issue_code()

        async with transaction(self.session):
            try:
                admin = await self.admin_repo.create(
                    Admin(
                        email=email,
                        password_hash=password_hash,
                        first_name=first_name,
                        last_name=last_name,
                    )
                )
            except IntegrityError as e:
                # Unique constraint on email catches concurrent signups
                raise ConflictError("Email already registered") from e
            assert admin.id is not None
            await self.admin_code_repo.create_code(admin.id, code, expires_at)

        logger.info("Admin signed up", admin_id=admin.id, email=self._email_for_log(email))

        if not send_verification_code_email(email, code):
            logger.warning("Verification email not delivered", admin_id=admin.id)

        return admin

    async def verify_admin_account(self, email: str, code: str) -> str:
        """Redeem a signup code and return a verification token.

        Checks run in a fixed order so an already verified account is
        reported as such regardless of the code supplied.
        """
        admin = await self.admin_repo.get_by_email(email)
        if admin is None:
            raise AccountNotFoundError()
        if admin.is_verified:
            raise AlreadyVerifiedError()

        assert admin.id is not None
        record = await self.admin_code_repo.get_by_admin_and_code(admin.id, code)
        if record is None:
            raise InvalidCodeError()
        if _is_expired(record):
            raise ExpiredCodeError()
        if record.used_at is not None:
            raise CodeAlreadyUsedError()

        async with transaction(self.session):
            await self.admin_repo.mark_verified(admin)
            await self.admin_code_repo.mark_used(record)

        logger.info("Admin account verified", admin_id=admin.id)
        return create_admin_verified_token(admin.id, admin.email)

    async def login_admin(self, email: str, password: str) -> str:
        """Check credentials and return a login token.

        Unknown email and wrong password share one error. The hash comparison
        runs in both cases so response timing does not reveal which.
        """
        admin = await self.admin_repo.get_by_email(email)

        password_hash = admin.password_hash if admin else get_dummy_password_hash()
        password_valid = verify_password(password, password_hash)

        if admin is None:
            logger.info("Admin login failed", reason="unknown_email")
            raise InvalidCredentialsError()

        if not password_valid:
            logger.info("Admin login failed", reason="wrong_password", admin_id=admin.id)
            raise InvalidCredentialsError()

        if not admin.is_verified:
            logger.info("Admin login failed", reason="unverified", admin_id=admin.id)
            raise UnverifiedAccountError()

        assert admin.id is not None
        logger.info("Admin logged in", admin_id=admin.id)
        return create_admin_login_token(admin.id)

    async def request_client_code(self, email: str) -> None:
        """Email a login code to a known client.

        Returns silently for unknown emails: no row is written and no email
        is sent, so callers cannot discover which emails are registered.
        """
        client = await self.client_repo.get_by_email(email)
        if client is None:
            logger.info("Client code requested for unknown email", email=self._email_for_log(email))
            return

        assert client.id is not None
        code, expires_at = issue_code()
        async with transaction(self.session):
            await self.client_code_repo.create_code(client.id, code, expires_at)

        logger.info("Client code issued", client_id=client.id)

        if not send_verification_code_email(email, code):
            logger.warning("Client code email not delivered", client_id=client.id)

    async def verify_client_code(self, email: str, code: str) -> str:
        """Redeem a client login code and return a client token.

        Unknown client, unknown code and used code all raise the same
        InvalidCodeError; only an expired code is reported distinctly.
        """
        client = await self.client_repo.get_by_email(email)
        if client is None:
            logger.info("Client code rejected", reason="unknown_client")
            raise InvalidCodeError()

        assert client.id is not None
        record = await self.client_code_repo.get_by_client_and_code(client.id, code)
        if record is None:
            logger.info("Client code rejected", reason="unknown_code", client_id=client.id)
            raise InvalidCodeError()
        if record.used_at is not None:
            logger.info("Client code rejected", reason="already_used", client_id=client.id)
            raise InvalidCodeError()
        if _is_expired(record):
            raise ExpiredCodeError()

        async with transaction(self.session):
            await self.client_code_repo.mark_used(record)

        logger.info("Client logged in", client_id=client.id)
        return create_client_token(client.id)
