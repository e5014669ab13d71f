"""Authentication endpoints for admins and clients."""

from fastapi import APIRouter, status

from src.phasetracker.api.dependencies import AuthServiceDep
from src.phasetracker.schemas.auth import (
    AdminSignupRequest,
    ClientCodeRequest,
    LoginRequest,
    MessageResponse,
    TokenResponse,
    VerifyCodeRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])

CLIENT_CODE_SENT_MESSAGE = "If an account exists for this email, a verification code has been sent."


@router.post(
    "/admin/signup",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Admin created, verification code emailed"},
        409: {"description": "Email already registered"},
    },
)
async def admin_signup(data: AdminSignupRequest, service: AuthServiceDep) -> MessageResponse:
    """Create an unverified admin account and email a verification code."""
    await service.signup_admin(data.email, data.password, data.first_name, data.last_name)
    return MessageResponse(
        message="Admin account created. Please check your email for a verification code."
    )


@router.post(
    "/admin/verify-account",
    response_model=TokenResponse,
    responses={
        200: {"description": "Account verified"},
        400: {"description": "Unknown account, already verified, or invalid/expired/used code"},
    },
)
async def admin_verify_account(data: VerifyCodeRequest, service: AuthServiceDep) -> TokenResponse:
    token = await service.verify_admin_account(data.email, data.code)
    return TokenResponse(token=token)


@router.post(
    "/admin/login",
    response_model=TokenResponse,
    responses={
        200: {"description": "Successful authentication"},
        401: {"description": "Invalid credentials"},
        403: {"description": "Account not verified"},
    },
)
async def admin_login(data: LoginRequest, service: AuthServiceDep) -> TokenResponse:
    token = await service.login_admin(data.email, data.password)
    return TokenResponse(token=token)


@router.post(
    "/client/request-code",
    response_model=MessageResponse,
    responses={200: {"description": "Same response whether or not the email is known"}},
)
async def client_request_code(data: ClientCodeRequest, service: AuthServiceDep) -> MessageResponse:
    """Email a one-time login code to a known client."""
    await service.request_client_code(data.email)
    return MessageResponse(message=CLIENT_CODE_SENT_MESSAGE)


@router.post(
    "/client/verify-code",
    response_model=TokenResponse,
    responses={
        200: {"description": "Code accepted"},
        400: {"description": "Invalid or expired code"},
    },
)
async def client_verify_code(data: VerifyCodeRequest, service: AuthServiceDep) -> TokenResponse:
    token = await service.verify_client_code(data.email, data.code)
    return TokenResponse(token=token)
