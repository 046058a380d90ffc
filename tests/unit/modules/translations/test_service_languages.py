"""Language management and aggregate reads."""

import pytest

from infrastructure.operations import OperationStatus


@pytest.mark.unit
class TestAddLanguage:
    def test_seeds_blank_copy_of_default_language(
        self, service, dataset, document_of, manifest_of
    ):
        result = service.add_language("it-IT", "Italian", "Italiano")

        assert result.is_success
        assert document_of(dataset, "it-IT") == {
            "common": {"confirm": "", "cancel": ""},
            "menu": {"home": ""},
        }
        manifest = manifest_of(dataset)
        assert manifest["languages"][-1] == {
            "code": "it-IT",
            "name": "Italian",
            "nativeName": "Italiano",
            "enabled": True,
            "file": "it-IT.json",
        }
        assert manifest["version"] == "1.0.1"

    def test_configured_template_language(self, dataset, document_of, make_service):
        service = make_service(dataset, template_language="de-DE")
        service.add_language("it-IT", "Italian", "Italiano")
        assert document_of(dataset, "it-IT") == {"common": {"confirm": "", "cancel": ""}}

    def test_existing_code_conflicts(self, service, dataset, manifest_of):
        result = service.add_language("fr-FR", "French", "Français")
        assert result.status == OperationStatus.CONFLICT
        assert manifest_of(dataset)["version"] == "1.0.0"

    def test_overwrite_updates_descriptor_and_keeps_document(
        self, service, dataset, document_of, manifest_of
    ):
        result = service.add_language(
            "fr-FR", "French", "Français", enabled=False, overwrite=True
        )

        assert result.is_success
        descriptor = [lang for lang in manifest_of(dataset)["languages"] if lang["code"] == "fr-FR"]
        assert descriptor[0]["enabled"] is False
        assert document_of(dataset, "fr-FR")["menu"]["home"] == "Accueil"

    def test_invalid_code(self, service):
        result = service.add_language("../it", "Italian", "Italiano")
        assert result.status == OperationStatus.INVALID_INPUT


@pytest.mark.unit
class TestDeleteLanguage:
    def test_deletes_manifest_entry_and_document(self, service, dataset, manifest_of):
        result = service.delete_language("fr-FR")

        assert result.is_success
        manifest = manifest_of(dataset)
        assert [lang["code"] for lang in manifest["languages"]] == ["en-US", "de-DE"]
        assert not (dataset["languages"] / "fr-FR.json").exists()
        assert manifest["version"] == "1.0.1"

    def test_protected_language_refused(self, service, dataset, manifest_of):
        result = service.delete_language("en-US")

        assert result.status == OperationStatus.PROTECTED
        assert (dataset["languages"] / "en-US.json").exists()
        assert manifest_of(dataset)["version"] == "1.0.0"

    def test_protected_checked_before_existence(self, make_dataset, make_service):
        paths = make_dataset({"fr-FR": {}})
        service = make_service(paths, protected=("zh-TW",))
        assert service.delete_language("zh-TW").status == OperationStatus.PROTECTED

    def test_default_language_is_protected(self, dataset, make_service):
        service = make_service(dataset)
        assert service.delete_language("en-US").status == OperationStatus.PROTECTED

    def test_unknown_language(self, service):
        assert service.delete_language("it-IT").status == OperationStatus.NOT_FOUND


@pytest.mark.unit
class TestLanguageConfig:
    def test_replaces_list_and_defaults(self, service, dataset, manifest_of):
        result = service.update_language_config(
            [
                {"code": "en-US", "name": "English", "nativeName": "English"},
                {"code": "fr-FR", "name": "French", "nativeName": "Français"},
            ],
            default_language="fr-FR",
        )

        assert result.is_success
        manifest = manifest_of(dataset)
        assert [lang["code"] for lang in manifest["languages"]] == ["en-US", "fr-FR"]
        assert manifest["defaultLanguage"] == "fr-FR"
        assert manifest["fallbackLanguage"] == "en-US"

    def test_duplicates_rejected(self, service, dataset, manifest_of):
        result = service.update_language_config([{"code": "a"}, {"code": "a"}])
        assert result.status == OperationStatus.INVALID_INPUT
        assert manifest_of(dataset)["version"] == "1.0.0"

    def test_invalid_entry_rejected(self, service):
        result = service.update_language_config([{"name": "no code"}])
        assert result.status == OperationStatus.INVALID_INPUT


@pytest.mark.unit
class TestReads:
    def test_list_languages(self, service):
        result = service.list_languages()
        assert result.is_success
        assert result.data["version"] == "1.0.0"
        assert len(result.data["languages"]) == 3

    def test_get_language(self, service):
        assert service.get_language("fr-FR").data["menu"]["home"] == "Accueil"

    def test_get_missing_language(self, service):
        result = service.get_language("it-IT")
        assert result.status == OperationStatus.NOT_FOUND
        assert result.error_code == "LANGUAGE_NOT_FOUND"

    def test_batch_collects_errors(self, service):
        result = service.get_languages_batch(["en-US", "it-IT"])
        assert list(result.data["data"]) == ["en-US"]
        assert result.data["errors"][0]["code"] == "it-IT"

    def test_replace_language(self, service, dataset, document_of, manifest_of):
        result = service.replace_language("de-DE", {"menu": {"home": "Start"}})
        assert result.is_success
        assert document_of(dataset, "de-DE") == {"menu": {"home": "Start"}}
        assert manifest_of(dataset)["version"] == "1.0.1"

    def test_complete_data_skips_disabled(self, make_dataset, make_service):
        paths = make_dataset(
            {"a": {"x": {"y": "1"}}, "b": {"x": {"y": "2"}}}, disabled=("b",)
        )
        service = make_service(paths)

        enabled = service.get_complete_data()
        everything = service.get_complete_data(include_disabled=True)

        assert list(enabled.data["messages"]) == ["a"]
        assert list(everything.data["messages"]) == ["a", "b"]
        assert enabled.data["defaultLanguage"] == "a"

    def test_enabled_messages(self, service):
        result = service.get_enabled_messages()
        assert result.data["config"]["version"] == "1.0.0"
        assert set(result.data["messages"]) == {"en-US", "fr-FR", "de-DE"}

    def test_file_manifest(self, service):
        result = service.get_file_manifest()
        files = result.data["files"]
        assert set(files) == {
            "language-list.json",
            "languages/de-DE.json",
            "languages/en-US.json",
            "languages/fr-FR.json",
        }
        assert files["languages/en-US.json"]["lastModified"].endswith("Z")

    @pytest.mark.parametrize(
        "client,needs_update",
        [(None, True), ("0.9.9", True), ("1.0.0", False), ("1.0.1", False)],
    )
    def test_check_version(self, service, client, needs_update):
        result = service.check_version(client)
        assert result.data["needsUpdate"] is needs_update
        assert result.data["serverVersion"] == "1.0.0"
