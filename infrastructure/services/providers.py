"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from modules.translations.factory import create_translation_service
from modules.translations.service import TranslationService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Application code should use the DI type alias for testability:
        from infrastructure.services import SettingsDep
        @router.get("/config")
        def get_config(settings: SettingsDep):
            return settings.model_dump()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_translation_service() -> TranslationService:
    """
    Get application-scoped translation service singleton.

    The service holds the lock serializing mutations, so one instance must
    be shared by every request of the process.

    Returns:
        TranslationService: Cached service configured from application settings.

    Usage:
        @router.get("/languages")
        async def list_languages(service: TranslationServiceDep):
            return service.list_languages().data
    """
    return create_translation_service(get_settings())
