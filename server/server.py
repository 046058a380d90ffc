from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.errors import setup_exception_handlers
from api.router import api_router
from api.dependencies.rate_limits import setup_rate_limiter
from infrastructure.logging import RequestContextMiddleware
from infrastructure.services import get_settings
from server.lifespan import lifespan

settings = get_settings()

handler = FastAPI(title="i18n-api", lifespan=lifespan)
setup_rate_limiter(handler)
setup_exception_handlers(handler)


handler.add_middleware(RequestContextMiddleware)
handler.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


handler.include_router(api_router)
