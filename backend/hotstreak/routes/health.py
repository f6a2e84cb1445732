"""
Health Routes - Liveness and configuration check
"""
from fastapi import APIRouter
from hotstreak.core.config import settings
from hotstreak.utils.timezone import get_local_today_date

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Report liveness, the day boundary in use and whether the record store is configured"""
    return {
        "status": "ok",
        "timezone": settings.APP_TIMEZONE,
        "today": get_local_today_date().isoformat(),
        "store_configured": bool(settings.SUPABASE_URL and settings.SUPABASE_KEY)
    }
