"""Version bumps and the archives built from them."""

import zipfile

import pytest

from infrastructure.operations import OperationStatus
from modules.translations.packaging import DebouncedPackagePolicy, ManualPackagePolicy


@pytest.mark.unit
class TestBumpVersion:
    def test_bump_stamps_manifest_and_builds(self, service, dataset, manifest_of):
        outcome = service.bump_version()

        manifest = manifest_of(dataset)
        assert outcome.version == manifest["version"] == "1.0.1"
        assert manifest["lastUpdated"] == outcome.last_updated
        assert manifest["lastUpdated"] != "2026-01-01T00:00:00.000Z"
        assert outcome.package == "language-1.0.1.zip"
        assert (dataset["downloads"] / "language-1.0.1.zip").exists()

    def test_archive_holds_bumped_manifest(self, service, dataset):
        service.bump_version()
        with zipfile.ZipFile(dataset["downloads"] / "language-1.0.1.zip") as zf:
            assert '"1.0.1"' in zf.read("language-list.json").decode("utf-8")

    def test_carry_across_segments(self, make_dataset, make_service, manifest_of):
        paths = make_dataset({"a": {}}, version="1.99.99")
        make_service(paths).bump_version()
        assert manifest_of(paths)["version"] == "2.0.0"

    def test_malformed_stored_version_is_io_failure(
        self, make_dataset, make_service, manifest_of
    ):
        paths = make_dataset({"a": {}}, version="1.0.0.0")

        result = make_service(paths).update_key("menu.title", {"a": "Hello"})

        assert result.status == OperationStatus.IO_FAILURE
        assert result.error_code == "IO_ERROR"
        assert "1.0.0.0" in result.message
        assert manifest_of(paths)["version"] == "1.0.0.0"

    def test_build_failure_keeps_bump(self, service, dataset, manifest_of, monkeypatch):
        def fail(version):
            raise OSError("disk full")

        monkeypatch.setattr(service.builder, "build", fail)

        result = service.update_key("menu.about", {"en-US": "About"})

        assert result.is_success
        assert result.data["version"] == "1.0.1"
        assert result.data["package"] is None
        assert "disk full" in result.data["packageError"]
        assert manifest_of(dataset)["version"] == "1.0.1"

    def test_manual_policy_defers_build(self, dataset, make_service, manifest_of):
        service = make_service(dataset, policy=ManualPackagePolicy())

        result = service.update_key("menu.about", {"en-US": "About"})

        assert result.data["package"] is None
        assert "packageError" not in result.data
        assert manifest_of(dataset)["version"] == "1.0.1"
        assert not dataset["downloads"].exists()

    def test_debounced_policy_skips_close_builds(self, dataset, make_service):
        now = [0.0]
        policy = DebouncedPackagePolicy(min_interval=30, clock=lambda: now[0])
        service = make_service(dataset, policy=policy)

        first = service.bump_version()
        now[0] = 5.0
        second = service.bump_version()
        now[0] = 40.0
        third = service.bump_version()

        assert first.package == "language-1.0.1.zip"
        assert second.package is None
        assert third.package == "language-1.0.3.zip"


@pytest.mark.unit
class TestPackages:
    def test_create_package_for_current_version(self, service, dataset):
        result = service.create_package()

        assert result.is_success
        assert result.data["fileName"] == "language-1.0.0.zip"
        assert result.data["version"] == "1.0.0"
        assert result.data["fileSize"] > 0

    def test_create_package_retries_after_failure(self, service, dataset, monkeypatch):
        def fail(version):
            raise OSError("boom")

        with monkeypatch.context() as m:
            m.setattr(service.builder, "build", fail)
            assert "packageError" in service.bump_version().to_dict()

        result = service.create_package()

        assert result.data["fileName"] == "language-1.0.1.zip"
        assert (dataset["downloads"] / "language-1.0.1.zip").exists()

    def test_latest_builds_missing_archive(self, dataset, make_service):
        service = make_service(dataset, policy=ManualPackagePolicy())
        service.bump_version()

        result = service.get_latest_package()

        assert result.is_success
        assert result.data["fileName"] == "language-1.0.1.zip"
        assert (dataset["downloads"] / "language-1.0.1.zip").exists()

    def test_latest_reuses_existing_archive(self, service, dataset, monkeypatch):
        service.bump_version()
        monkeypatch.setattr(
            service.builder, "build", lambda version: pytest.fail("rebuilt")
        )
        assert service.get_latest_package().data["version"] == "1.0.1"

    def test_find_package(self, service):
        service.create_package()
        assert service.find_package("language-1.0.0.zip").is_success
        missing = service.find_package("language-0.0.1.zip")
        assert missing.status == OperationStatus.NOT_FOUND
        assert missing.message == "File not found or expired"
