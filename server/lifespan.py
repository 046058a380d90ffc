from contextlib import asynccontextmanager
from typing import AsyncIterator, TYPE_CHECKING

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.logging import configure_logging
from infrastructure.services import get_settings, get_translation_service

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


def _get_logger(settings: "Settings") -> BoundLogger:
    return configure_logging(settings=settings)


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def _prepare_storage(app: FastAPI, settings: "Settings", logger: BoundLogger) -> None:
    service = get_translation_service()
    try:
        service.store.ensure_layout()
        settings.storage.downloads_path.mkdir(parents=True, exist_ok=True)
    except Exception as exc:
        # Fail fast, nothing works without the data directory
        logger.error("storage_preparation_failed", error=str(exc))
        raise
    app.state.translation_service = service
    logger.info(
        "storage_ready",
        manifest=str(settings.storage.manifest_path),
        languages_dir=str(settings.storage.languages_path),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    logger = _get_logger(settings)

    logger.info("application_startup")
    _list_configs(settings, logger)
    _prepare_storage(app, settings, logger)

    yield

    logger.info("application_shutdown")
