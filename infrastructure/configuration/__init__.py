"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the i18n API
using Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    manifest_path = settings.storage.manifest_path
    protected = settings.translations.protected_languages
    ```
"""

from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "settings"]
