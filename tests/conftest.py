"""Shared fixtures: a throwaway data directory and services built on it."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from modules.translations.packaging import ArchiveBuilder, PackagePolicy
from modules.translations.service import TranslationService
from modules.translations.store import LanguageStore


def write_dataset(
    root: Path,
    documents: Dict[str, Dict[str, Any]],
    version: str = "1.0.0",
    default_language: Optional[str] = None,
    disabled: tuple = (),
) -> Dict[str, Path]:
    """Write a manifest and one document per language under ``root``."""
    data_dir = root / "data"
    languages_dir = data_dir / "languages"
    languages_dir.mkdir(parents=True, exist_ok=True)
    codes = list(documents)
    default = default_language or (codes[0] if codes else "en-US")
    manifest = {
        "version": version,
        "lastUpdated": "2026-01-01T00:00:00.000Z",
        "defaultLanguage": default,
        "fallbackLanguage": default,
        "languages": [
            {
                "code": code,
                "name": code,
                "nativeName": code,
                "enabled": code not in disabled,
                "file": f"{code}.json",
            }
            for code in codes
        ],
    }
    (data_dir / "language-list.json").write_text(
        json.dumps(manifest, ensure_ascii=False, indent=2), encoding="utf-8"
    )
    for code, document in documents.items():
        (languages_dir / f"{code}.json").write_text(
            json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8"
        )
    return {
        "manifest": data_dir / "language-list.json",
        "languages": languages_dir,
        "downloads": root / "downloads",
    }


def build_service(
    paths: Dict[str, Path],
    protected: tuple = (),
    policy: Optional[PackagePolicy] = None,
    template_language: str = "",
) -> TranslationService:
    store = LanguageStore(
        manifest_path=paths["manifest"],
        languages_dir=paths["languages"],
        default_language="en-US",
        fallback_language="en-US",
    )
    builder = ArchiveBuilder(
        manifest_path=paths["manifest"],
        languages_dir=paths["languages"],
        downloads_dir=paths["downloads"],
    )
    return TranslationService(
        store=store,
        builder=builder,
        policy=policy,
        protected_languages=protected,
        template_language=template_language,
    )


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def sample_documents():
    return {
        "en-US": {
            "common": {"confirm": "Confirm", "cancel": "Cancel"},
            "menu": {"home": "Home"},
        },
        "fr-FR": {
            "common": {"confirm": "Confirmer", "cancel": "Annuler"},
            "menu": {"home": "Accueil"},
        },
        "de-DE": {
            "common": {"confirm": "Bestätigen", "cancel": ""},
        },
    }


@pytest.fixture
def dataset(tmp_path, sample_documents):
    """Three languages, en-US default and protected."""
    return write_dataset(tmp_path, sample_documents, default_language="en-US")


@pytest.fixture
def service(dataset):
    return build_service(dataset, protected=("en-US",))


@pytest.fixture
def empty_pair(tmp_path):
    """Languages ``a`` and ``b`` with empty documents at version 1.0.0."""
    return write_dataset(tmp_path, {"a": {}, "b": {}}, default_language="a")


@pytest.fixture
def pair_service(empty_pair):
    return build_service(empty_pair, protected=("a",))


@pytest.fixture
def manifest_of():
    """Read the manifest document written on disk for a dataset."""

    def _read(paths: Dict[str, Path]) -> Dict[str, Any]:
        return read_json(paths["manifest"])

    return _read


@pytest.fixture
def document_of():
    """Read a language document written on disk for a dataset."""

    def _read(paths: Dict[str, Path], code: str) -> Dict[str, Any]:
        return read_json(paths["languages"] / f"{code}.json")

    return _read


@pytest.fixture
def make_dataset(tmp_path):
    """Factory writing a custom dataset under the test's tmp_path."""

    def _make(documents: Dict[str, Dict[str, Any]], **kwargs) -> Dict[str, Path]:
        return write_dataset(tmp_path, documents, **kwargs)

    return _make


@pytest.fixture
def make_service():
    """Factory building a TranslationService over a dataset."""
    return build_service
