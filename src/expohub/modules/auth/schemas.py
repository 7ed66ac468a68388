"""Pydantic schemas for unified sign-in."""

from pydantic import Field

from expohub.core.auth import LoginRequest, UserType


class UnifiedLoginRequest(LoginRequest):
    """Sign-in without knowing the account type up front.

    Attributes:
        type: One role, or several tried in the given order. Defaults to
            organization, exhibitor, visitor.
    """

    type: UserType | list[UserType] | None = Field(default=None)

    def roles(self) -> list[UserType]:
        if self.type is None:
            return ["organization", "exhibitor", "visitor"]
        if isinstance(self.type, list):
            return self.type
        return [self.type]
