"""Unified sign-in across organizations, exhibitors and visitors."""

from collections.abc import Awaitable, Callable
from typing import Annotated

import structlog
from fastapi import Depends

from expohub.core.auth import INVALID_CREDENTIALS, LoginResult, UserType
from expohub.core.errors import UnauthorizedError
from expohub.modules.auth.schemas import UnifiedLoginRequest
from expohub.modules.exhibitors.services import ExhibitorSvc
from expohub.modules.organizations.services import OrganizationSvc
from expohub.modules.visitors.services import VisitorSvc


logger = structlog.get_logger()

Authenticator = Callable[[str, str], Awaitable[LoginResult]]


class LoginService:
    """Try each role's sign-in in turn until one accepts the credentials."""

    def __init__(
        self,
        organizations: OrganizationSvc,
        exhibitors: ExhibitorSvc,
        visitors: VisitorSvc,
    ) -> None:
        self.authenticators: dict[UserType, Authenticator] = {
            "organization": organizations.authenticate,
            "exhibitor": exhibitors.authenticate,
            "visitor": visitors.authenticate,
        }

    async def login(self, data: UnifiedLoginRequest) -> LoginResult:
        """Sign in as the first role that accepts the credentials.

        Only an invalid-credentials rejection moves on to the next role.
        Any other error (for example an account without a password) is
        returned as is.

        Raises:
            UnauthorizedError: If no role accepts the credentials
        """
        for role in data.roles():
            try:
                result = await self.authenticators[role](data.email, data.password)
            except UnauthorizedError as exc:
                if exc.error_code != UnauthorizedError.error_code:
                    raise
                logger.debug("login_role_rejected", role=role)
                continue
            logger.info("login_succeeded", user_type=result.user_type)
            return result

        logger.info("login_failed", roles=data.roles())
        raise UnauthorizedError(INVALID_CREDENTIALS)


# Type alias for dependency injection
LoginSvc = Annotated[LoginService, Depends(LoginService)]
