"""User API routes."""

from fastapi import APIRouter, status

from expohub.modules.users.schemas import UserCreate, UserCreateResponse
from expohub.modules.users.services import UserSvc


router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="Create a console user. The email must be unused.",
)
async def create_user(data: UserCreate, service: UserSvc) -> UserCreateResponse:
    """Create a console user."""
    return await service.create_user(data)
