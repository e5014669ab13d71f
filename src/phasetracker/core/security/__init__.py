"""Security utilities - passwords, tokens and one-time codes.

Re-exports all security-related functions for convenience.
"""

from src.phasetracker.core.security.codes import CODE_MAX, CODE_MIN, generate_code, issue_code
from src.phasetracker.core.security.crypto import (
    TokenRole,
    admin_id_from_claims,
    client_id_from_claims,
    create_admin_login_token,
    create_admin_verified_token,
    create_client_token,
    decode_token,
    get_dummy_password_hash,
    hash_password,
    verify_password,
)

__all__ = [
    # Codes
    "CODE_MAX",
    "CODE_MIN",
    "generate_code",
    "issue_code",
    # Crypto
    "TokenRole",
    "admin_id_from_claims",
    "client_id_from_claims",
    "create_admin_login_token",
    "create_admin_verified_token",
    "create_client_token",
    "decode_token",
    "get_dummy_password_hash",
    "hash_password",
    "verify_password",
]
