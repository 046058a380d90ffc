from fastapi import APIRouter
from api.routes.system import router as system_router
from infrastructure.services import get_settings
from modules.translations.api import router as translations_router

api_router = APIRouter()

api_router.include_router(system_router)
api_router.include_router(
    translations_router, prefix=get_settings().server.API_PREFIX
)
