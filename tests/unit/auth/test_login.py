"""Unit tests for the unified sign-in."""

import pytest
from pydantic import ValidationError

from expohub.core.auth import LoginResult
from expohub.core.errors import UnauthorizedError
from expohub.modules.auth.schemas import UnifiedLoginRequest
from expohub.modules.auth.services import LoginService


class StubRole:
    """Role service whose authenticate either succeeds or raises ``error``."""

    def __init__(self, user_type: str, error: UnauthorizedError | None = None) -> None:
        self.user_type = user_type
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def authenticate(self, email: str, password: str) -> LoginResult:
        self.calls.append((email, password))
        if self.error:
            raise self.error
        return LoginResult(user_type=self.user_type, user={"email": email})


def rejected(user_type: str) -> StubRole:
    return StubRole(user_type, UnauthorizedError("Invalid email or password"))


def login_request(**kwargs) -> UnifiedLoginRequest:
    return UnifiedLoginRequest(email="someone@acme.io", password="secret", **kwargs)


class TestUnifiedLoginRequest:
    def test_default_roles(self):
        assert login_request().roles() == ["organization", "exhibitor", "visitor"]

    def test_single_role(self):
        assert login_request(type="visitor").roles() == ["visitor"]

    def test_role_list_keeps_order(self):
        assert login_request(type=["visitor", "organization"]).roles() == ["visitor", "organization"]

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            login_request(type="admin")


class TestLoginService:
    """Tests for LoginService.login."""

    async def test_first_accepting_role_wins(self):
        organizations, exhibitors, visitors = rejected("organization"), StubRole("exhibitor"), StubRole("visitor")
        service = LoginService(organizations, exhibitors, visitors)

        result = await service.login(login_request())

        assert result.user_type == "exhibitor"
        assert len(organizations.calls) == 1
        assert visitors.calls == []

    async def test_only_requested_roles_are_tried(self):
        organizations, exhibitors, visitors = StubRole("organization"), StubRole("exhibitor"), StubRole("visitor")
        service = LoginService(organizations, exhibitors, visitors)

        result = await service.login(login_request(type="visitor"))

        assert result.user_type == "visitor"
        assert organizations.calls == []

    async def test_all_rejected(self):
        service = LoginService(rejected("organization"), rejected("exhibitor"), rejected("visitor"))

        with pytest.raises(UnauthorizedError) as exc_info:
            await service.login(login_request())

        assert exc_info.value.error_code == "unauthorized"

    async def test_other_errors_stop_the_search(self):
        no_password = StubRole(
            "organization",
            UnauthorizedError("Password not set for this organization", error_code="password_not_set"),
        )
        exhibitors = StubRole("exhibitor")
        service = LoginService(no_password, exhibitors, StubRole("visitor"))

        with pytest.raises(UnauthorizedError) as exc_info:
            await service.login(login_request())

        assert exc_info.value.error_code == "password_not_set"
        assert exhibitors.calls == []
