from datetime import datetime

from fastapi import APIRouter

from labelscan import config


router = APIRouter()


@router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": "0.1.0",
        "service": "labelscan",
        "cloud_provider_configured": bool(config.GOOGLE_VISION_API_KEY),
    }
