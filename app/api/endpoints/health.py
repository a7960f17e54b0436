"""
Health check and monitoring endpoints.
"""

import logging
from typing import Dict, Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from datetime import datetime, timezone

from app.core.config import Settings, get_settings
from app.core.database import get_db, query
from app.core.deps import require_admin

router = APIRouter(tags=["Health"])
logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", status_code=status.HTTP_200_OK)
def health_check() -> Dict[str, str]:
    """
    Basic health check endpoint.

    Returns 200 OK if the service is running.
    """
    return {
        "status": "healthy",
        "timestamp": _now(),
    }


@router.get("/health/detailed", status_code=status.HTTP_200_OK)
def detailed_health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    Health check including database connectivity.
    """
    health_status = {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "timestamp": _now(),
        "checks": {}
    }

    try:
        query(db, "SELECT 1 AS ok")
        health_status["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful"
        }
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        health_status["status"] = "unhealthy"
        health_status["checks"]["database"] = {
            "status": "unhealthy",
            "message": "Database error"
        }

    return health_status


@router.get("/metrics", status_code=status.HTTP_200_OK, dependencies=[Depends(require_admin)])
def get_metrics(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Row counts for the main tables.

    Authorization required: admin
    """
    counts = query(
        db,
        """SELECT (SELECT COUNT(*) FROM companies) AS total_companies,
                  (SELECT COUNT(*) FROM jobs) AS total_jobs,
                  (SELECT COUNT(*) FROM users) AS total_users,
                  (SELECT COUNT(*) FROM applications) AS total_applications""",
    )[0]

    return {
        "timestamp": _now(),
        "metrics": counts,
    }
