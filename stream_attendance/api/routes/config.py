"""
Configuration API endpoints
Provides frontend configuration and environment information
"""

from fastapi import APIRouter, Depends, HTTPException, status

from stream_attendance.core.config import settings
from stream_attendance.core.identity import VerifiedIdentity
from stream_attendance.core.permissions import get_admin_identity
from stream_attendance.core.session_store import session_store

router = APIRouter()


@router.get("/frontend")
async def get_frontend_config():
    """Get frontend configuration (public endpoint)"""
    return settings.get_frontend_config()


@router.get("/full")
async def get_full_config(admin: VerifiedIdentity = Depends(get_admin_identity)):
    """Get full configuration details (admins only)"""
    return settings.get_environment_config()


@router.get("/health")
async def config_health_check():
    """Health check endpoint for configuration system"""
    required_configs = [
        settings.DATABASE_URL,
        settings.SECRET_KEY,
        settings.FRONTEND_URL,
        settings.BACKEND_URL,
    ]
    missing_configs = [config for config in required_configs if not config]

    if missing_configs:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Missing required configurations: {len(missing_configs)} items"
        )

    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "auth_mode": settings.AUTH_MODE,
        "cors_origins_count": len(settings.CORS_ORIGINS),
        "auth_listeners": session_store.listener_count,
        "loaded_config_files": settings.get_environment_config().get("loaded_config_files", []),
    }
