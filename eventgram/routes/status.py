"""Health check and status endpoints."""

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from eventgram.config import settings

_app_start_time = time.time()

router = APIRouter(tags=["Health"])


@router.get("/status")
async def get_status() -> JSONResponse:
    """
    Health check endpoint for monitoring and load balancers.

    Unauthenticated and does not touch any backing service.

    Returns:
        JSONResponse with status, version, and uptime_seconds
    """
    return JSONResponse(
        status_code=200,
        content={
            "status": "ok",
            "version": settings.api_version,
            "uptime_seconds": int(time.time() - _app_start_time),
        },
    )
