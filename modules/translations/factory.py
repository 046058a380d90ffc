"""Factory functions for creating translation components.

Wires the store, archive builder and package policy from application
settings.
"""

from typing import TYPE_CHECKING

from infrastructure.logging import get_module_logger
from modules.translations.packaging import ArchiveBuilder, create_package_policy
from modules.translations.service import TranslationService
from modules.translations.store import LanguageStore

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

logger = get_module_logger()


def create_translation_service(settings: "Settings") -> TranslationService:
    """Create a TranslationService configured from ``settings``.

    Args:
        settings: Application settings (storage paths, protected languages,
            package policy).

    Returns:
        TranslationService: Configured service instance

    Raises:
        ValueError: If the configured package policy is unknown

    Usage:
        service = create_translation_service(get_settings())
        result = service.create_key("menu.title", {"en-US": "Menu"})
    """
    storage = settings.storage
    feature = settings.translations

    store = LanguageStore(
        manifest_path=storage.manifest_path,
        languages_dir=storage.languages_path,
        default_language=feature.DEFAULT_LANGUAGE,
        fallback_language=feature.FALLBACK_LANGUAGE,
    )
    builder = ArchiveBuilder(
        manifest_path=storage.manifest_path,
        languages_dir=storage.languages_path,
        downloads_dir=storage.downloads_path,
    )
    policy = create_package_policy(
        feature.PACKAGE_POLICY, feature.PACKAGE_MIN_INTERVAL_SECONDS
    )

    logger.info(
        "translation_service_created",
        data_dir=str(storage.DATA_DIR),
        downloads_dir=str(storage.downloads_path),
        package_policy=policy.name,
    )
    return TranslationService(
        store=store,
        builder=builder,
        policy=policy,
        protected_languages=feature.protected_languages,
        template_language=feature.TEMPLATE_LANGUAGE,
    )
