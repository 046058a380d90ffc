"""Request bodies of the translation API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from modules.translations.keypath import is_valid_key_path


def _check_key_path(value: str) -> str:
    if not is_valid_key_path(value):
        raise ValueError(
            "key must be dot-separated segments of letters, digits, '_' or '-'"
        )
    return value


class VersionCheckRequest(BaseModel):
    clientVersion: Optional[str] = None


class BatchLanguagesRequest(BaseModel):
    codes: List[str]


class LanguageConfigRequest(BaseModel):
    languages: List[Dict[str, Any]]
    defaultLanguage: Optional[str] = None
    fallbackLanguage: Optional[str] = None


class ReplaceLanguageRequest(BaseModel):
    translations: Dict[str, Any]


class SingleKeyRequest(BaseModel):
    """Set one key in one language."""

    key: str
    value: Optional[str] = None

    validate_key = field_validator("key")(_check_key_path)


class KeyTranslationsRequest(BaseModel):
    """A key with values for some languages; the rest are filled with ""."""

    key: str
    translations: Dict[str, Optional[str]] = Field(default_factory=dict)

    validate_key = field_validator("key")(_check_key_path)


class RenameKeyRequest(BaseModel):
    oldKey: str
    newKey: str
    overwrite: bool = False

    validate_keys = field_validator("oldKey", "newKey")(_check_key_path)


class DeleteKeyRequest(BaseModel):
    key: str
    cleanEmpty: bool = True

    validate_key = field_validator("key")(_check_key_path)


class AddLanguageRequest(BaseModel):
    """A new language. Extra fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    code: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_-]+$")
    name: str = Field(min_length=1)
    nativeName: str = Field(min_length=1)
    enabled: bool = True
    overwrite: bool = False
