"""
User Management API Endpoints

REST API endpoints for user CRUD operations.
Thin layer: maps request bodies to domain input, delegates to the service and
projects results into response models. Failures propagate to the exception
handlers registered by the application.
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, Field, field_serializer

from roster.modules.users import constants
from roster.modules.users.domain.user import User, UserInput
from roster.modules.users.services.user_service import UserService

logger = logging.getLogger("roster.users.api")

router = APIRouter(prefix=constants.USERS_BASE_PATH, tags=["users"])


# Request/Response Models
class UserRequest(BaseModel):
    name: str = Field(..., min_length=constants.MIN_NAME_LENGTH, max_length=constants.MAX_NAME_LENGTH)
    email: str  # Format is checked by the service, value passed through unchanged
    age: Optional[int] = Field(None, ge=constants.MIN_AGE, le=constants.MAX_AGE)


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    age: int
    created_at: datetime = Field(default_factory=datetime.now, serialization_alias="createdAt")

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return value.strftime(constants.TIMESTAMP_FORMAT)


def to_user_input(request: UserRequest) -> UserInput:
    """Map a request body to domain input. IDs are never taken from the body."""
    return UserInput(name=request.name, email=request.email, age=request.age)


def to_user_response(user: User) -> UserResponse:
    """Project a stored user; ``created_at`` is stamped now."""
    return UserResponse(**user.to_dict())


async def get_user_service(request: Request) -> UserService:
    """FastAPI dependency returning the service owned by the application."""
    return request.app.state.user_service


@router.get("", response_model=List[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    """
    List all users sorted by name.
    """
    logger.info("[user_endpoints.list_users] listing users")
    users = [to_user_response(user) for user in service.list_users()]
    logger.info(f"[user_endpoints.list_users] count={len(users)}")
    return users


@router.post("", status_code=201, response_model=UserResponse)
async def create_user(
    request: UserRequest,
    service: UserService = Depends(get_user_service)
):
    """
    Create a new user.
    """
    logger.info(f"[user_endpoints.create_user] name={request.name}")
    user = service.create_user(to_user_input(request))
    logger.info(f"[user_endpoints.create_user] created user_id={user.id}")
    return to_user_response(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service)
):
    """
    Get user details by ID.
    """
    logger.info(f"[user_endpoints.get_user] user_id={user_id}")
    return to_user_response(service.get_user(user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UserRequest,
    service: UserService = Depends(get_user_service)
):
    """
    Replace name, email and age of an existing user.
    """
    logger.info(f"[user_endpoints.update_user] user_id={user_id}")
    user = service.update_user(user_id, to_user_input(request))
    return to_user_response(user)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service)
):
    """
    Delete user by ID.
    """
    logger.info(f"[user_endpoints.delete_user] user_id={user_id}")
    service.delete_user(user_id)
    logger.info(f"[user_endpoints.delete_user] deleted user_id={user_id}")
    return Response(status_code=204)
