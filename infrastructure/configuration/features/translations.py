"""Translations module feature settings."""

from typing import Literal

from pydantic import Field, field_validator
import structlog

from infrastructure.configuration.base import FeatureSettings, split_csv

logger = structlog.stdlib.get_logger().bind(component="config.translations")

PackagePolicyName = Literal["immediate", "debounced", "manual"]


class TranslationsSettings(FeatureSettings):
    """Configuration for the translation store and its packaging.

    Environment Variables:
        PROTECTED_LANGUAGES: Comma separated codes that can never be deleted
            (default: zh-CN,en-US,zh-TW)
        DEFAULT_LANGUAGE: Default language used when the manifest omits one
        FALLBACK_LANGUAGE: Fallback language used when the manifest omits one
        TEMPLATE_LANGUAGE: Language whose structure seeds new languages
            (default: empty, meaning the manifest default language)
        PACKAGE_POLICY: When archives are rebuilt after a version bump:
            immediate, debounced or manual (default: immediate)
        PACKAGE_MIN_INTERVAL_SECONDS: Minimum seconds between two physical
            rebuilds under the debounced policy (default: 30)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        if settings.translations.PACKAGE_POLICY == "manual":
            ...
        ```
    """

    PROTECTED_LANGUAGES: str = Field(
        default="zh-CN,en-US,zh-TW", alias="PROTECTED_LANGUAGES"
    )
    DEFAULT_LANGUAGE: str = Field(default="zh-CN", alias="DEFAULT_LANGUAGE")
    FALLBACK_LANGUAGE: str = Field(default="zh-CN", alias="FALLBACK_LANGUAGE")
    TEMPLATE_LANGUAGE: str = Field(default="", alias="TEMPLATE_LANGUAGE")
    PACKAGE_POLICY: PackagePolicyName = Field(
        default="immediate", alias="PACKAGE_POLICY"
    )
    PACKAGE_MIN_INTERVAL_SECONDS: float = Field(
        default=30.0, alias="PACKAGE_MIN_INTERVAL_SECONDS"
    )

    @field_validator("PACKAGE_POLICY", mode="before")
    @classmethod
    def _normalize_policy(cls, v: str) -> str:
        return str(v).strip().lower() if v else "immediate"

    @field_validator("PACKAGE_MIN_INTERVAL_SECONDS", mode="after")
    @classmethod
    def _validate_interval(cls, v: float) -> float:
        if v < 0:
            logger.warning("negative_package_interval_clamped", value=v)
            return 0.0
        return v

    @property
    def protected_languages(self) -> list[str]:
        return split_csv(self.PROTECTED_LANGUAGES)
