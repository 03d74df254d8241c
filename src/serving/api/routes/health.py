"""
Health Check Endpoints

Provides health and readiness checks for orchestration systems.
"""

from datetime import datetime, timezone
from typing import Dict, Any

from fastapi import APIRouter, Response
from pydantic import BaseModel

from src.config import get_settings
from src.serving.dataset import check_dataset_health

settings = get_settings()
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    environment: str
    timestamp: datetime
    checks: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Checks:
    - Application status
    - Dataset file availability
    """
    checks = {"dataset": check_dataset_health()}
    overall_status = "healthy" if checks["dataset"]["status"] == "healthy" else "degraded"

    return HealthResponse(
        status=overall_status,
        version=settings.version,
        environment=settings.app_env,
        timestamp=datetime.now(timezone.utc),
        checks=checks,
    )


@router.get("/health/live")
async def liveness_check() -> Dict[str, str]:
    """
    Kubernetes liveness probe endpoint.

    Returns 200 if the application is running.
    """
    return {"status": "alive"}


@router.get("/health/ready")
def readiness_check(response: Response) -> Dict[str, str]:
    """
    Kubernetes readiness probe endpoint.

    Returns 200 if the dataset can be served.
    """
    dataset_health = check_dataset_health()

    if dataset_health["status"] != "healthy":
        response.status_code = 503
        return {"status": "not_ready", "reason": "dataset_unavailable"}

    return {"status": "ready"}
