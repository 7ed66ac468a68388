"""Credential utilities shared by the sign-in and account creation flows."""

from expohub.core.auth.backend import (
    INVALID_CREDENTIALS,
    IssuedCredential,
    default_password,
    generate_invite_token,
    hash_password,
    issue_credential,
    phone_matches,
    verify_password,
)
from expohub.core.auth.schemas import (
    IssuedCredentials,
    LoginRequest,
    LoginResult,
    UserType,
    one_time_credentials,
)


__all__ = [
    "INVALID_CREDENTIALS",
    "IssuedCredential",
    "IssuedCredentials",
    "LoginRequest",
    "LoginResult",
    "UserType",
    "default_password",
    "generate_invite_token",
    "hash_password",
    "issue_credential",
    "one_time_credentials",
    "phone_matches",
    "verify_password",
]
