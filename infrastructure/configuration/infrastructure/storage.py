"""Storage infrastructure settings."""

from pathlib import Path

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class StorageSettings(InfrastructureSettings):
    """Locations of the manifest, language documents and generated archives.

    Environment Variables:
        DATA_DIR: Root data directory (default: data)
        MANIFEST_FILE: Manifest file name, relative to DATA_DIR
            (default: language-list.json)
        LANGUAGES_DIR: Language documents directory, relative to DATA_DIR
            (default: languages)
        DOWNLOADS_DIR: Directory receiving generated archives (default: downloads)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        manifest = settings.storage.manifest_path
        ```
    """

    DATA_DIR: Path = Field(default=Path("data"), alias="DATA_DIR")
    MANIFEST_FILE: str = Field(default="language-list.json", alias="MANIFEST_FILE")
    LANGUAGES_DIR: str = Field(default="languages", alias="LANGUAGES_DIR")
    DOWNLOADS_DIR: Path = Field(default=Path("downloads"), alias="DOWNLOADS_DIR")

    @property
    def manifest_path(self) -> Path:
        return Path(self.DATA_DIR) / self.MANIFEST_FILE

    @property
    def languages_path(self) -> Path:
        return Path(self.DATA_DIR) / self.LANGUAGES_DIR

    @property
    def downloads_path(self) -> Path:
        return Path(self.DOWNLOADS_DIR)
