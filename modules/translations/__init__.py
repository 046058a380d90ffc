"""Translation resource management.

Stores one JSON document per language plus a manifest, keeps keys present
across every language, versions the dataset and packages it as zip archives.

Main components:
- keypath: dot-path get/set/delete inside nested documents
- versioning: Version with carry and version comparison
- models: Manifest and LanguageDescriptor
- store: LanguageStore over the data directory
- packaging: ArchiveBuilder and package policies
- service: TranslationService (propagation, keys, languages, packages)
- api: FastAPI router
"""

from modules.translations.factory import create_translation_service
from modules.translations.models import LanguageDescriptor, Manifest
from modules.translations.packaging import ArchiveBuilder
from modules.translations.service import TranslationService
from modules.translations.store import LanguageStore
from modules.translations.versioning import Version

__all__ = [
    "ArchiveBuilder",
    "LanguageDescriptor",
    "LanguageStore",
    "Manifest",
    "TranslationService",
    "Version",
    "create_translation_service",
]
