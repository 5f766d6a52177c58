"""
Authentication utilities for API endpoints
"""

import logging
from typing import Optional
from fastapi import HTTPException, Header, Depends, Request
from dataclasses import dataclass
import jwt

from services.jwt_service import JWTService

logger = logging.getLogger(__name__)

@dataclass
class AuthContext:
    """Claims of the authenticated caller"""
    is_authenticated: bool
    user_id: str
    email: Optional[str] = None
    is_admin: bool = False


def get_jwt_service(request: Request) -> JWTService:
    """JWT service built by the app factory from configured settings"""
    return request.app.state.jwt_service


async def authenticate_api(
    request: Request,
    authorization: Optional[str] = Header(None)
) -> AuthContext:
    """
    FastAPI dependency for JWT Bearer token authentication.

    Args:
        request: Incoming request; the auth context is attached to request.state
        authorization: Authorization header with Bearer JWT token

    Returns:
        AuthContext: Authentication context with the token claims

    Raises:
        HTTPException: 401 if authentication fails
    """
    if not authorization:
        logger.error("AUTH: API request missing Authorization header - returning 401")
        raise HTTPException(
            status_code=401,
            detail="Missing Authorization header"
        )

    if not authorization.startswith("Bearer "):
        logger.error("AUTH: Invalid Authorization header format - returning 401")
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization header format. Expected 'Bearer <token>'"
        )

    token = authorization[7:].strip()  # Remove "Bearer " prefix

    try:
        claims = get_jwt_service(request).decode(token)
    except jwt.InvalidTokenError as e:
        logger.error(f"AUTH: Invalid JWT token: {str(e)}")
        raise HTTPException(401, "Invalid JWT token")

    auth_context = AuthContext(
        is_authenticated=True,
        user_id=claims["sub"],
        email=claims.get("email"),
        is_admin=claims.get("is_admin") is True  # only a JSON true grants admin
    )
    request.state.auth = auth_context

    logger.info(f"AUTH: JWT validation successful - User: {auth_context.user_id}, Admin: {auth_context.is_admin}")
    return auth_context


async def require_admin(auth: AuthContext = Depends(authenticate_api)) -> AuthContext:
    """
    FastAPI dependency that additionally requires the admin claim

    Raises:
        HTTPException: 403 if the caller is not an admin
    """
    if not auth.is_admin:
        logger.warning(f"AUTH: User {auth.user_id} denied - admin privileges required")
        raise HTTPException(403, "Admin privileges required")
    return auth


async def authorize_write(request: Request, auth: AuthContext = Depends(authenticate_api)) -> AuthContext:
    """Write guard; enforces the admin claim only when REQUIRE_ADMIN_FOR_WRITES is enabled"""
    if request.app.state.settings.require_admin_for_writes:
        return await require_admin(auth)
    return auth


class AuthConfig:
    """
    Centralized authentication configuration for the application.
    All endpoints require authentication.
    """

    @staticmethod
    def get_auth_dependency():
        """Get the mandatory auth dependency for all endpoints"""
        return authenticate_api

    @staticmethod
    def get_write_auth_dependency():
        """Get the auth dependency for mutating endpoints"""
        return authorize_write
