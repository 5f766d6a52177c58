"""
Health check API route
"""

from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Depends

from api.routes.users import get_users_service
from services.users_service import UsersService
from utils.auth import AuthConfig

router = APIRouter()

@router.get("/health")
async def health_check(
    users_service: UsersService = Depends(get_users_service),
    _=Depends(AuthConfig.get_auth_dependency())
):
    """Health check - reports whether the user store is reachable"""
    try:
        connected = await users_service.ping()
    except Exception as e:
        raise HTTPException(status_code=503, detail=f"Health check failed: {str(e)}")

    if not connected:
        raise HTTPException(status_code=503, detail="Health check failed: store unreachable")

    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected"
    }
