"""File-backed storage for the manifest and per-language documents.

The store is a thin layer over the data directory: every call reads or
writes the files directly, nothing is cached between calls. Errors are
raised as the underlying exceptions (FileNotFoundError, JSONDecodeError,
OSError, ValueError) and classified by the service layer.
"""

import json
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from infrastructure.logging import get_module_logger
from modules.translations.models import Manifest, TranslationDocument

logger = get_module_logger()

LANGUAGE_CODE_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_language_code(code: Any) -> bool:
    return isinstance(code, str) and bool(LANGUAGE_CODE_PATTERN.match(code))


def write_json(path: Path, data: Any) -> None:
    """Write ``data`` as indented UTF-8 JSON through a temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class LanguageStore:
    """Reads and writes the manifest and the language documents.

    Attributes:
        manifest_path: Path of the manifest JSON file.
        languages_dir: Directory holding one ``<code>.json`` per language.
        default_language: Default language used when the manifest has none.
        fallback_language: Fallback language used when the manifest has none.
    """

    def __init__(
        self,
        manifest_path: Path,
        languages_dir: Path,
        default_language: str = "zh-CN",
        fallback_language: str = "zh-CN",
    ):
        self.manifest_path = Path(manifest_path)
        self.languages_dir = Path(languages_dir)
        self.default_language = default_language
        self.fallback_language = fallback_language

    def ensure_layout(self) -> None:
        """Create the languages directory and an initial manifest if missing."""
        self.languages_dir.mkdir(parents=True, exist_ok=True)
        if not self.manifest_path.exists():
            self.write_manifest(self.read_manifest())
            logger.info("manifest_initialized", path=str(self.manifest_path))

    # Manifest

    def read_manifest(self) -> Manifest:
        """Load the manifest, falling back to defaults when the file is absent.

        Raises:
            json.JSONDecodeError: If the manifest is not valid JSON.
            pydantic.ValidationError: If the manifest has the wrong shape.
        """
        if self.manifest_path.exists():
            manifest = Manifest.model_validate(read_json(self.manifest_path))
        else:
            manifest = Manifest()
        if not manifest.defaultLanguage:
            manifest.defaultLanguage = self.default_language
        if not manifest.fallbackLanguage:
            manifest.fallbackLanguage = self.fallback_language
        return manifest

    def write_manifest(self, manifest: Manifest) -> None:
        write_json(self.manifest_path, manifest.to_document())

    # Documents

    def document_path(self, code: str) -> Path:
        """Path of the document for ``code``.

        Raises:
            ValueError: If ``code`` is not a plain language code.
        """
        if not is_valid_language_code(code):
            raise ValueError(f"Invalid language code: {code!r}")
        return self.languages_dir / f"{code}.json"

    def document_exists(self, code: str) -> bool:
        return self.document_path(code).exists()

    def read_document(self, code: str) -> TranslationDocument:
        """Load the document for ``code``.

        Raises:
            FileNotFoundError: If the language has no document.
            ValueError: If the document is not a JSON object.
        """
        data = read_json(self.document_path(code))
        if not isinstance(data, dict):
            raise ValueError(f"Language document for {code} is not an object")
        return data

    def read_document_or_empty(self, code: str) -> TranslationDocument:
        try:
            return self.read_document(code)
        except FileNotFoundError:
            return {}

    def write_document(self, code: str, document: TranslationDocument) -> None:
        write_json(self.document_path(code), document)

    def delete_document(self, code: str) -> bool:
        path = self.document_path(code)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list_document_files(self) -> List[Path]:
        if not self.languages_dir.exists():
            return []
        return sorted(
            path for path in self.languages_dir.iterdir()
            if path.is_file() and path.suffix == ".json"
        )

    @staticmethod
    def modified_at(path: Path) -> Optional[str]:
        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            return None
        return (
            datetime.fromtimestamp(mtime, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

    def read_documents(self, codes: List[str]) -> Dict[str, TranslationDocument]:
        """Load every existing document among ``codes``, skipping missing ones."""
        documents: Dict[str, TranslationDocument] = {}
        for code in codes:
            try:
                documents[code] = self.read_document(code)
            except FileNotFoundError:
                continue
        return documents
