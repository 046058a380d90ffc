"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.translations import TranslationsSettings

__all__ = [
    "TranslationsSettings",
]
