"""Infrastructure settings __init__ - exports all infrastructure settings."""

from infrastructure.configuration.infrastructure.server import ServerSettings
from infrastructure.configuration.infrastructure.storage import StorageSettings

__all__ = [
    "ServerSettings",
    "StorageSettings",
]
