import time

from fastapi import APIRouter

from ..config import settings
from ..iso20022.registry import supported_messages

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint for container orchestration.

    Returns basic liveness plus the message types the gateway can parse.
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "supportedMessages": supported_messages(),
        "timestamp": time.time(),
    }
