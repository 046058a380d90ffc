"""Translation store data models.

Defines the manifest document and the language descriptors it lists. Field
names follow the on-disk JSON (camelCase) so documents round-trip unchanged.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.translations.versioning import DEFAULT_VERSION

TranslationDocument = Dict[str, Any]


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 with millisecond precision."""
    return (
        datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


class LanguageDescriptor(BaseModel):
    """One entry of the manifest language list.

    Attributes:
        code: Language code, also the document file stem (e.g. "fr-FR").
        name: English display name.
        nativeName: Display name in the language itself.
        enabled: Whether aggregate reads include the language by default.
        file: Document file name, ``<code>.json``.
    """

    model_config = ConfigDict(extra="allow")

    code: str
    name: str = ""
    nativeName: str = ""
    enabled: bool = True
    file: str = ""

    def model_post_init(self, __context: Any) -> None:
        if not self.file:
            self.file = f"{self.code}.json"


class Manifest(BaseModel):
    """Singleton document listing languages, dataset version and defaults.

    Unknown keys found on disk are preserved.
    """

    model_config = ConfigDict(extra="allow")

    version: str = DEFAULT_VERSION
    lastUpdated: Optional[str] = None
    defaultLanguage: Optional[str] = None
    fallbackLanguage: Optional[str] = None
    languages: List[LanguageDescriptor] = Field(default_factory=list)

    @property
    def codes(self) -> List[str]:
        return [language.code for language in self.languages]

    def find(self, code: str) -> Optional[LanguageDescriptor]:
        for language in self.languages:
            if language.code == code:
                return language
        return None

    def index_of(self, code: str) -> int:
        for index, language in enumerate(self.languages):
            if language.code == code:
                return index
        return -1

    def selected(self, include_disabled: bool = False) -> List[LanguageDescriptor]:
        if include_disabled:
            return list(self.languages)
        return [language for language in self.languages if language.enabled]

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
