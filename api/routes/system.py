import time

from fastapi import APIRouter, Request
from infrastructure.services import SettingsDep
from api.dependencies.rate_limits import SYSTEM_PROBE_LIMIT, get_limiter

router = APIRouter(tags=["System"])
limiter = get_limiter()

APP_NAME = "i18n-api"


@router.get("/version")
@limiter.limit(SYSTEM_PROBE_LIMIT)
def get_version(request: Request, settings: SettingsDep):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit(SYSTEM_PROBE_LIMIT)
def get_health(request: Request):  # pylint: disable=unused-argument
    """Healthcheck endpoint."""
    return {"status": "ok", "message": "I18n API Server is running"}


@router.get("/")
def get_info(settings: SettingsDep):
    """Service name, deployed version and current server time (ms)."""
    return {
        "name": APP_NAME,
        "version": settings.GIT_SHA,
        "timestamp": int(time.time() * 1000),
    }
