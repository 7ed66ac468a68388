"""Sign-in schemas shared by the organization, exhibitor and visitor flows."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from expohub.core.auth.backend import IssuedCredential


UserType = Literal["organization", "exhibitor", "visitor"]


class LoginRequest(BaseModel):
    """Email and secret for one of the sign-in endpoints.

    Attributes:
        email: Account email
        password: Password; visitors may also supply their mobile number
    """

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class LoginResult(BaseModel):
    """Successful sign-in.

    There is no token: clients keep ``user`` and present the ids it
    contains to the other endpoints.
    """

    success: bool = True
    user_type: UserType
    user: dict[str, Any]


class IssuedCredentials(BaseModel):
    """One-time default credentials; cannot be retrieved again later."""

    email: str | None
    password: str
    note: str = "Please save these credentials. Password can be changed after first login."


def one_time_credentials(credential: IssuedCredential, email: str | None) -> IssuedCredentials | None:
    """Expose a generated default password in a creation response, once."""
    if not credential.is_default:
        return None
    return IssuedCredentials(email=email, password=credential.plaintext or "")
