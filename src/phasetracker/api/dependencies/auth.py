"""Authentication dependencies for admin and client routes.

A missing or malformed Authorization header is a 401. A token that does not
decode, has expired, or belongs to the other kind of principal is a 403.
"""

from typing import Annotated, Any

from fastapi import Depends, Header, HTTPException, status

from src.phasetracker.api.dependencies.repositories import AdminRepo, ClientRepo
from src.phasetracker.core.logging import bind_principal_context
from src.phasetracker.core.security import (
    TokenRole,
    admin_id_from_claims,
    client_id_from_claims,
    decode_token,
)
from src.phasetracker.models import Admin, Client


def _decode_bearer(authorization: str | None) -> dict[str, Any]:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )

    payload = decode_token(authorization[7:])
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token",
        )
    return payload


async def get_current_admin(
    admin_repo: AdminRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> Admin:
    """Accept either admin token shape: {adminId} or {id, email, role: "admin"}."""
    payload = _decode_bearer(authorization)

    admin_id = admin_id_from_claims(payload)
    if admin_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Not a valid admin token",
        )

    admin = await admin_repo.get_by_id(admin_id)
    if admin is None or not admin.is_verified:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Not a valid admin token",
        )

    bind_principal_context(TokenRole.ADMIN, admin_id, admin.email)
    return admin


CurrentAdmin = Annotated[Admin, Depends(get_current_admin)]


async def get_current_client(
    client_repo: ClientRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> Client:
    payload = _decode_bearer(authorization)

    client_id = client_id_from_claims(payload)
    if client_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Not a valid client token",
        )

    client = await client_repo.get_by_id(client_id)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Not a valid client token",
        )

    bind_principal_context(TokenRole.CLIENT, client_id, client.email)
    return client


CurrentClient = Annotated[Client, Depends(get_current_client)]
