from fastapi import APIRouter
from datetime import datetime
from zoneinfo import ZoneInfo
import logging
from musicmead.core import config
from musicmead.models.schemas import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def health_check():
    """Health check endpoint, also the target of the keep-alive pinger"""
    now = datetime.now(ZoneInfo(config.DISPLAY_TIMEZONE)).strftime("%m/%d/%Y, %I:%M:%S %p")
    logger.info(f"healthz-ok {now}")
    return {
        "status": "ok",
        "time": now,
        "environment": config.ENVIRONMENT
    }
