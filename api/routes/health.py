"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
import platform

from fastapi import APIRouter

from ogw_sdk.utils import utc_now


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": utc_now().isoformat(),
        "service": "ogw-sanity-runner",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }
