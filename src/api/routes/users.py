"""
User management API routes
All data access goes through UsersService; routes only map outcomes to HTTP.
"""

import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, HTTPException, Depends, Request

from models.user import UserCreateRequest, UserUpdateRequest, UserResponse
from services.base_service import NOT_FOUND, ServiceResult
from services.users_service import UsersService
from utils.auth import AuthConfig

router = APIRouter()
logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


def get_users_service(request: Request) -> UsersService:
    """Users service bound to the application's store"""
    return request.app.state.users_service


def serialize_user(record: Dict[str, Any]) -> Dict[str, Any]:
    """Public JSON for a user record"""
    return UserResponse.model_validate(record).model_dump(mode="json")


def _raise_for_failure(result: ServiceResult):
    if result.success:
        return
    if result.error_type == NOT_FOUND:
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)
    # Store errors were already logged by the service layer
    raise HTTPException(status_code=500, detail="An unexpected error occurred")


@router.get("")
async def list_users(
    users_service: UsersService = Depends(get_users_service),
    _=Depends(AuthConfig.get_auth_dependency())
):
    """List all users"""
    result = await users_service.list_users()
    _raise_for_failure(result)
    return [serialize_user(record) for record in result.data]


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    users_service: UsersService = Depends(get_users_service),
    _=Depends(AuthConfig.get_auth_dependency())
):
    """Get user details"""
    result = await users_service.get_user_by_id(user_id)
    _raise_for_failure(result)
    return serialize_user(result.first)


@router.post("", status_code=201)
async def create_user(
    request: UserCreateRequest,
    users_service: UsersService = Depends(get_users_service),
    _=Depends(AuthConfig.get_write_auth_dependency())
):
    """Create a new user"""
    result = await users_service.create_user(
        name=request.name,
        email=request.email,
        password=request.password,
        description=request.description
    )
    _raise_for_failure(result)

    user = serialize_user(result.first)
    logger.info(f"Created user {user['id']}")
    return user


@router.put("/{user_id}")
async def update_user(
    user_id: str,
    request: Optional[UserUpdateRequest] = None,
    users_service: UsersService = Depends(get_users_service),
    _=Depends(AuthConfig.get_write_auth_dependency())
):
    """Update user details; a missing body is an empty update"""
    changes = request.changes() if request else {}
    result = await users_service.update_user(user_id, changes)
    _raise_for_failure(result)
    return serialize_user(result.first)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    users_service: UsersService = Depends(get_users_service),
    _=Depends(AuthConfig.get_write_auth_dependency())
):
    """Delete a user and return it as it was before deletion"""
    result = await users_service.delete_user(user_id)
    _raise_for_failure(result)

    user = serialize_user(result.first)
    logger.info(f"Deleted user {user['id']}")
    return user
