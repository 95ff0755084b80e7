"""
Health check endpoints for monitoring.
"""
from fastapi import APIRouter, Depends
from typing import Dict, Any
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from app.config import get_settings
from app.database.connection import get_db, check_db_connection
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])
settings = get_settings()

SERVICE_NAME = "Matchmaking API"
SERVICE_VERSION = "1.0.0"

@router.get("", response_model=Dict[str, Any])
async def health_check():
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION
    }

@router.get("/detailed", response_model=Dict[str, Any])
async def detailed_health_check(
    db: Session = Depends(get_db)
):
    """Detailed health check with database and configuration status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "checks": {}
    }

    # Database health check
    if check_db_connection(db):
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    else:
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": "Database connection failed"
        }
        health_status["status"] = "unhealthy"

    # Configuration check
    issues = settings.validate_configuration()
    health_status["checks"]["configuration"] = {
        "status": "healthy" if not issues else "degraded",
        "issues": issues
    }
    if issues and health_status["status"] == "healthy":
        health_status["status"] = "degraded"

    return health_status
