"""User service for business logic."""

from typing import Annotated, Any

import structlog
from fastapi import Depends

from expohub.core.auth import hash_password
from expohub.core.errors import ConflictError
from expohub.modules.users.models import USER_RECORD
from expohub.modules.users.repos import UserRepo
from expohub.modules.users.schemas import UserCreate, UserCreateResponse


logger = structlog.get_logger()


class UserService:
    """Service for console user management."""

    def __init__(self, repo: UserRepo) -> None:
        self.repo = repo

    async def create_user(self, data: UserCreate) -> UserCreateResponse:
        """Create a user.

        Unlike organizations, users get no default password: without one
        the account cannot sign in until a password is set.

        Raises:
            ConflictError: If a user with this email already exists
        """
        if await self.repo.email_exists(data.email):
            raise ConflictError(
                "User with this email already exists",
                details={"email": data.email},
            )

        extra: dict[str, Any] = {
            "password_hash": hash_password(data.password) if data.password else None,
        }
        live = await self.repo.columns()
        row = await self.repo.insert(USER_RECORD.build(data.record_payload(), live, extra=extra))
        row.pop("password_hash", None)
        logger.info("user_created", user_id=row.get("id"), organization_id=data.organization_id)
        return UserCreateResponse(user=row)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(UserService)]
