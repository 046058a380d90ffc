"""Tests for modules.translations.store."""

import json

import pytest

from modules.translations.models import Manifest
from modules.translations.store import LanguageStore, is_valid_language_code


@pytest.fixture
def store(dataset):
    return LanguageStore(dataset["manifest"], dataset["languages"])


@pytest.mark.unit
class TestManifest:
    def test_read_manifest(self, store):
        manifest = store.read_manifest()
        assert manifest.version == "1.0.0"
        assert manifest.codes == ["en-US", "fr-FR", "de-DE"]
        assert manifest.defaultLanguage == "en-US"

    def test_missing_manifest_defaults(self, tmp_path):
        store = LanguageStore(
            tmp_path / "language-list.json",
            tmp_path / "languages",
            default_language="zh-CN",
            fallback_language="en-US",
        )
        manifest = store.read_manifest()
        assert manifest.version == "1.0.0"
        assert manifest.languages == []
        assert manifest.defaultLanguage == "zh-CN"
        assert manifest.fallbackLanguage == "en-US"

    def test_write_preserves_unknown_fields(self, dataset, store):
        raw = json.loads(dataset["manifest"].read_text(encoding="utf-8"))
        raw["custom"] = {"owner": "web"}
        dataset["manifest"].write_text(json.dumps(raw), encoding="utf-8")

        store.write_manifest(store.read_manifest())

        assert json.loads(dataset["manifest"].read_text(encoding="utf-8"))["custom"] == {
            "owner": "web"
        }

    def test_ensure_layout_creates_manifest(self, tmp_path):
        store = LanguageStore(tmp_path / "data" / "list.json", tmp_path / "data" / "langs")
        store.ensure_layout()
        assert (tmp_path / "data" / "langs").is_dir()
        written = json.loads((tmp_path / "data" / "list.json").read_text(encoding="utf-8"))
        assert written["version"] == "1.0.0"
        assert written["languages"] == []

    def test_manifest_helpers(self):
        manifest = Manifest.model_validate(
            {
                "languages": [
                    {"code": "a", "enabled": True},
                    {"code": "b", "enabled": False},
                ]
            }
        )
        assert manifest.find("b").file == "b.json"
        assert manifest.index_of("missing") == -1
        assert [lang.code for lang in manifest.selected()] == ["a"]
        assert [lang.code for lang in manifest.selected(include_disabled=True)] == [
            "a",
            "b",
        ]


@pytest.mark.unit
class TestDocuments:
    def test_read_document(self, store):
        assert store.read_document("fr-FR")["menu"]["home"] == "Accueil"

    def test_read_missing_document_raises(self, store):
        with pytest.raises(FileNotFoundError):
            store.read_document("it-IT")

    def test_read_document_or_empty(self, store):
        assert store.read_document_or_empty("it-IT") == {}

    def test_write_document_keeps_unicode(self, dataset, store):
        store.write_document("ja-JP", {"menu": {"home": "ホーム"}})
        text = (dataset["languages"] / "ja-JP.json").read_text(encoding="utf-8")
        assert "ホーム" in text
        assert store.read_document("ja-JP") == {"menu": {"home": "ホーム"}}

    def test_write_leaves_no_temp_files(self, dataset, store):
        store.write_document("en-US", {"a": {"b": "c"}})
        assert not [p for p in dataset["languages"].iterdir() if p.name.startswith(".")]

    def test_non_object_document_raises(self, dataset, store):
        (dataset["languages"] / "xx.json").write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError):
            store.read_document("xx")

    def test_delete_document(self, store):
        assert store.delete_document("de-DE") is True
        assert store.delete_document("de-DE") is False
        assert store.document_exists("de-DE") is False

    @pytest.mark.parametrize("code", ["../etc", "a/b", "", "fr.FR"])
    def test_rejects_path_like_codes(self, store, code):
        assert is_valid_language_code(code) is False
        with pytest.raises(ValueError):
            store.document_path(code)

    def test_list_document_files(self, store):
        names = [path.name for path in store.list_document_files()]
        assert names == ["de-DE.json", "en-US.json", "fr-FR.json"]

    def test_read_documents_skips_missing(self, store):
        documents = store.read_documents(["en-US", "it-IT"])
        assert list(documents) == ["en-US"]
