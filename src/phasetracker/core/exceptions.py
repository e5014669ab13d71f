"""Domain error taxonomy and the HTTP exception handlers that map it.

Services raise typed errors; the transport maps each error's kind to a status
code through ERROR_STATUS_CODES. Nothing inspects message text.
"""

from enum import Enum

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.phasetracker.core.logging import get_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Stable error categories exposed to the transport layer."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    ACCOUNT_NOT_FOUND = "account_not_found"
    CONFLICT = "conflict"
    OWNERSHIP = "ownership"
    FORBIDDEN = "forbidden"
    INVALID_CREDENTIALS = "invalid_credentials"
    UNVERIFIED_ACCOUNT = "unverified_account"
    INVALID_CODE = "invalid_code"
    EXPIRED_CODE = "expired_code"
    CODE_ALREADY_USED = "code_already_used"
    ALREADY_VERIFIED = "already_verified"
    STORAGE = "storage"


ERROR_STATUS_CODES: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # verify-account reports every failure as 400
    ErrorKind.ACCOUNT_NOT_FOUND: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.OWNERSHIP: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNVERIFIED_ACCOUNT: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_CODE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.EXPIRED_CODE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.CODE_ALREADY_USED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ALREADY_VERIFIED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class PhaseTrackerError(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.STORAGE
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES[self.kind]


class ValidationError(PhaseTrackerError):
    kind = ErrorKind.VALIDATION
    default_message = "Invalid request"


class NotFoundError(PhaseTrackerError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not found"


class AccountNotFoundError(NotFoundError):
    """Unknown account on a flow that reports every failure as bad input."""

    kind = ErrorKind.ACCOUNT_NOT_FOUND
    default_message = "Admin account not found"


class ConflictError(PhaseTrackerError):
    kind = ErrorKind.CONFLICT
    default_message = "Resource already exists"


class OwnershipError(PhaseTrackerError):
    kind = ErrorKind.OWNERSHIP
    default_message = "Phase does not belong to the specified project"


class ForbiddenError(PhaseTrackerError):
    kind = ErrorKind.FORBIDDEN
    default_message = "Access denied"


class InvalidCredentialsError(PhaseTrackerError):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid credentials"


class UnverifiedAccountError(PhaseTrackerError):
    kind = ErrorKind.UNVERIFIED_ACCOUNT
    default_message = "Account not verified. Please check your email."


class InvalidCodeError(PhaseTrackerError):
    kind = ErrorKind.INVALID_CODE
    default_message = "Invalid verification code"


class ExpiredCodeError(PhaseTrackerError):
    kind = ErrorKind.EXPIRED_CODE
    default_message = "Verification code has expired"


class CodeAlreadyUsedError(PhaseTrackerError):
    kind = ErrorKind.CODE_ALREADY_USED
    default_message = "Verification code has already been used"


class AlreadyVerifiedError(PhaseTrackerError):
    kind = ErrorKind.ALREADY_VERIFIED
    default_message = "Admin account is already verified"


class StorageError(PhaseTrackerError):
    """Database failure. Its message is never shown to callers."""

    kind = ErrorKind.STORAGE
    default_message = "Storage operation failed"


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(PhaseTrackerError)
    async def domain_exception_handler(request: Request, exc: PhaseTrackerError) -> JSONResponse:
        request_id = correlation_id.get()
        if exc.kind is ErrorKind.STORAGE:
            logger.error(
                "Storage failure",
                error=exc.message,
                request_id=request_id,
                path=request.url.path,
            )
            detail = "Internal server error"
        else:
            logger.info(
                "Request rejected",
                error_kind=exc.kind.value,
                path=request.url.path,
            )
            detail = exc.message
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": detail,
                "request_id": request_id,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
