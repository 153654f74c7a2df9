"""System API routes (status, logs)"""

from fastapi import APIRouter, Query

from .. import __version__
from ..config import settings as app_settings
from ..services.log_service import LOG_TYPES, log_service

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/status")
async def system_status():
    """Basic system status check"""
    return {
        "status": "ok",
        "version": __version__,
        "data_dir": str(app_settings.DATA_DIR),
        "uploads_dir": str(app_settings.UPLOADS_DIR),
        "logs_dir": str(app_settings.LOGS_DIR),
    }


@router.get("/logs")
async def get_logs(
    type: str = Query("error", pattern="^(info|error)$"),
    limit: int = Query(100, ge=1, le=1000),
):
    """Tail of a log channel"""
    return {"type": type, "types": list(LOG_TYPES), "lines": log_service.get_logs(type, limit)}
