"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated
from fastapi import Depends
from infrastructure.configuration import Settings
from infrastructure.services.providers import get_settings, get_translation_service
from modules.translations.service import TranslationService

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Translation service dependency, override get_translation_service in tests
TranslationServiceDep = Annotated[
    TranslationService, Depends(get_translation_service)
]

__all__ = [
    "SettingsDep",
    "TranslationServiceDep",
]
