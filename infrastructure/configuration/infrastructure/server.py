"""Server infrastructure settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import InfrastructureSettings, split_csv


class ServerSettings(InfrastructureSettings):
    """HTTP server runtime configuration.

    Environment Variables:
        HOST: Interface the server binds to (default: 0.0.0.0)
        PORT: Port the server listens on (default: 3400)
        CORS_ORIGIN: Allowed origins, comma separated, "*" for any (default: *)
        API_PREFIX: Path prefix of the translation API (default: /api/i18n)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        origins = settings.server.cors_origins
        ```
    """

    HOST: str = Field(default="0.0.0.0", alias="HOST")
    PORT: int = Field(default=3400, alias="PORT")
    CORS_ORIGIN: str = Field(default="*", alias="CORS_ORIGIN")
    API_PREFIX: str = Field(default="/api/i18n", alias="API_PREFIX")

    @field_validator("API_PREFIX", mode="before")
    @classmethod
    def _normalize_prefix(cls, v: str) -> str:
        """Ensure the prefix starts with a slash and has no trailing slash."""
        if not v:
            return ""
        return "/" + str(v).strip("/")

    @property
    def cors_origins(self) -> list[str]:
        return split_csv(self.CORS_ORIGIN) or ["*"]
