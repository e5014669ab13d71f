"""Cryptographic utilities - password hashing and JWT tokens."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import argon2
from jose import JWTError, jwt

from src.phasetracker.core.config import get_settings


class TokenRole:
    """Principal role constants carried in tokens."""

    ADMIN = "admin"
    CLIENT = "client"


@lru_cache
def _get_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _get_password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        _get_password_hasher().verify(hashed, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


@lru_cache
def get_dummy_password_hash() -> str:
    """Hash checked against when no account matches, so login timing is uniform."""
    return hash_password("phasetracker-dummy-password")


def _encode(claims: dict[str, Any], expires_delta: timedelta | None) -> str:
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.access_token_expire_hours)

    to_encode = {**claims, "exp": datetime.now(UTC) + expires_delta}
    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def create_admin_login_token(admin_id: int, expires_delta: timedelta | None = None) -> str:
    """Create the token issued by admin login: {adminId}."""
    return _encode({"adminId": admin_id}, expires_delta)


def create_admin_verified_token(
    admin_id: int,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """Create the token issued on account verification: {id, email, role}."""
    return _encode({"id": admin_id, "email": email, "role": TokenRole.ADMIN}, expires_delta)


def create_client_token(client_id: int, expires_delta: timedelta | None = None) -> str:
    """Create the token issued by client code login: {clientId}."""
    return _encode({"clientId": client_id}, expires_delta)


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None


def admin_id_from_claims(payload: dict[str, Any]) -> int | None:
    """Extract the admin ID from either admin token shape.

    Login tokens carry {adminId}; verification tokens carry {id, role: "admin"}.
    """
    admin_id = payload.get("adminId")
    if admin_id is None and payload.get("role") == TokenRole.ADMIN:
        admin_id = payload.get("id")
    if isinstance(admin_id, bool) or not isinstance(admin_id, int):
        return None
    return admin_id


def client_id_from_claims(payload: dict[str, Any]) -> int | None:
    """Extract the client ID from a client token."""
    client_id = payload.get("clientId")
    if isinstance(client_id, bool) or not isinstance(client_id, int):
        return None
    return client_id
