"""Translation service: key propagation, language management and packaging.

Every mutation ends with exactly one version bump, which re-stamps the
manifest and, depending on the package policy, rebuilds the archive for the
new version before returning. Mutations are serialized by a single
re-entrant lock; reads go straight to disk.
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    OperationResult,
    OperationStatus,
    classify_io_error,
)
from modules.translations import keypath
from modules.translations.models import LanguageDescriptor, Manifest, utc_now_iso
from modules.translations.packaging import (
    ArchiveBuilder,
    ImmediatePackagePolicy,
    PackagePolicy,
)
from modules.translations.store import LanguageStore, is_valid_language_code
from modules.translations.versioning import Version, compare_versions

logger = get_module_logger()


@dataclass(frozen=True)
class SingleUpdate:
    """An explicit value for one language, winning over propagation fill."""

    code: str
    value: Any


@dataclass
class BumpOutcome:
    """Result of a version bump.

    ``package`` is the archive built for the new version, None when the
    policy skipped the build or the build failed; ``package_error`` then
    carries the failure and the archive must be recreated explicitly.
    """

    version: str
    last_updated: str
    package: Optional[str] = None
    package_error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "version": self.version,
            "lastUpdated": self.last_updated,
            "package": self.package,
        }
        if self.package_error:
            data["packageError"] = self.package_error
        return data


def _normalize_value(value: Any) -> Any:
    return "" if value is None else value


class TranslationService:
    """Operations over the translation store.

    Attributes:
        store: LanguageStore reading and writing the data directory.
        builder: ArchiveBuilder producing the downloadable packages.
        policy: PackagePolicy deciding whether a bump rebuilds the archive.
        protected_languages: Codes that can never be deleted.
        template_language: Language seeding new documents; empty means the
            manifest default language.
    """

    def __init__(
        self,
        store: LanguageStore,
        builder: ArchiveBuilder,
        policy: Optional[PackagePolicy] = None,
        protected_languages: Iterable[str] = (),
        template_language: str = "",
    ):
        self.store = store
        self.builder = builder
        self.policy = policy or ImmediatePackagePolicy()
        self.protected_languages = frozenset(protected_languages)
        self.template_language = template_language
        self._lock = threading.RLock()

    # Version / package trigger

    def bump_version(self) -> BumpOutcome:
        """Advance the dataset version, stamp it and rebuild per policy.

        Raises:
            OSError, ValueError: If the manifest cannot be read or written.
                A failed archive build does not raise.
        """
        with self._lock:
            manifest = self.store.read_manifest()
            previous = manifest.version
            try:
                next_version = Version.parse(previous).bump()
            except ValueError as exc:
                raise OSError(f"Malformed manifest version {previous!r}: {exc}") from exc
            manifest.version = str(next_version)
            manifest.lastUpdated = utc_now_iso()
            self.store.write_manifest(manifest)

            outcome = BumpOutcome(
                version=manifest.version, last_updated=manifest.lastUpdated
            )
            if self.policy.should_build():
                try:
                    info = self.builder.build(manifest.version)
                    self.policy.record_build()
                    outcome.package = info.file_name
                except Exception as exc:  # the bump itself stands
                    outcome.package_error = classify_io_error(
                        exc, action="build_package"
                    ).message
                    logger.error(
                        "package_build_failed",
                        version=manifest.version,
                        error=str(exc),
                    )
            else:
                logger.info(
                    "package_build_deferred",
                    version=manifest.version,
                    policy=self.policy.name,
                )

            logger.info(
                "version_bumped",
                previous_version=previous,
                version=manifest.version,
            )
            return outcome

    def _finish(
        self,
        message: str,
        data: Dict[str, Any],
        changed: bool,
        action: str,
    ) -> OperationResult:
        """Bump once if anything changed and attach the outcome to ``data``."""
        if changed:
            try:
                data.update(self.bump_version().to_dict())
            except Exception as exc:
                result = classify_io_error(exc, action=action)
                result.data = data
                logger.error("version_bump_failed", action=action, error=str(exc))
                return result
        return OperationResult.success(data=data, message=message)

    # Propagation

    def propagate(
        self,
        key: str,
        provided_values: Optional[Dict[str, Any]] = None,
        single_update: Optional[SingleUpdate] = None,
    ) -> OperationResult:
        """Make ``key`` present in every manifest language.

        Codes in ``provided_values`` that the manifest does not list are
        reported in ``errors`` and not written.

        For each language: an absent key takes the provided value for that
        language, else the single-update value when it targets that
        language, else ``""``. A present key is overwritten only by the
        single update targeting it or by a provided value. Only documents
        that change are written. One language failing does not stop the
        others. The version is bumped once if any document changed.
        """
        if not keypath.is_valid_key_path(key):
            return OperationResult.invalid_input(f"Invalid key path: {key!r}")
        if provided_values is not None and not isinstance(provided_values, dict):
            return OperationResult.invalid_input("translations must be an object")
        provided = provided_values or {}

        with self._lock:
            try:
                manifest = self.store.read_manifest()
            except Exception as exc:
                return classify_io_error(exc, action="read_manifest")

            codes = manifest.codes
            # A single update may target a document not listed in the manifest
            if single_update and single_update.code not in codes:
                codes.append(single_update.code)
            results: List[Dict[str, Any]] = []
            errors: List[Dict[str, Any]] = []

            unknown = [code for code in provided if code not in codes]
            for code in unknown:
                errors.append(
                    {"code": code, "key": key, "error": "Language not in manifest"}
                )

            changed = False
            for code in codes:
                try:
                    document = self.store.read_document_or_empty(code)
                    current = keypath.get_value(document, key)
                    present = current is not keypath.MISSING
                    targeted = single_update is not None and single_update.code == code

                    if not present and code in provided:
                        value = _normalize_value(provided[code])
                    elif targeted:
                        value = _normalize_value(single_update.value)
                    elif code in provided:
                        value = _normalize_value(provided[code])
                    elif not present:
                        value = ""
                    else:
                        value = current

                    updated = not present or value != current
                    if updated:
                        keypath.set_value(document, key, value)
                        self.store.write_document(code, document)
                        changed = True
                    results.append(
                        {"code": code, "key": key, "value": value, "updated": updated}
                    )
                except Exception as exc:
                    failure = classify_io_error(exc, action="propagate")
                    errors.append({"code": code, "key": key, "error": failure.message})
                    logger.warning(
                        "propagation_failed", code=code, key=key, error=str(exc)
                    )

            logger.info(
                "key_propagated",
                key=key,
                updated=sum(1 for r in results if r["updated"]),
                failed=len(errors),
            )
            data = {
                "key": key,
                "successCount": len(results),
                "errorCount": len(errors),
                "results": results,
                "errors": errors or None,
            }
            return self._finish(
                f"Key '{key}' propagated", data, changed, action="propagate"
            )

    # Key operations

    def _documents(self, codes: List[str]) -> Dict[str, Dict[str, Any]]:
        return {code: self.store.read_document_or_empty(code) for code in codes}

    def create_key(
        self, key: str, translations: Optional[Dict[str, Any]] = None
    ) -> OperationResult:
        """Create ``key`` in every language; Conflict if any already has it."""
        if not keypath.is_valid_key_path(key):
            return OperationResult.invalid_input(f"Invalid key path: {key!r}")

        with self._lock:
            try:
                manifest = self.store.read_manifest()
                documents = self._documents(manifest.codes)
            except Exception as exc:
                return classify_io_error(exc, action="create_key")

            existing = [
                code for code, document in documents.items()
                if keypath.has_key(document, key)
                or keypath.blocking_leaf(document, key) is not None
            ]
            if existing:
                logger.info("key_create_conflict", key=key, languages=existing)
                return OperationResult.error(
                    OperationStatus.CONFLICT,
                    f"Key '{key}' already exists",
                    data={"key": key, "languages": existing},
                )
            return self.propagate(key, translations)

    def update_key(
        self, key: str, translations: Optional[Dict[str, Any]] = None
    ) -> OperationResult:
        """Write ``translations`` for ``key`` and fill the other languages."""
        return self.propagate(key, translations)

    def update_single_key(self, code: str, key: str, value: Any) -> OperationResult:
        """Set ``key`` in one language, propagating it to the others."""
        if not is_valid_language_code(code):
            return OperationResult.invalid_input(f"Invalid language code: {code!r}")
        if not self.store.document_exists(code):
            return OperationResult.not_found(f"Language file for {code} not found")
        return self.propagate(key, single_update=SingleUpdate(code, value))

    def rename_key(
        self, old_key: str, new_key: str, overwrite: bool = False
    ) -> OperationResult:
        """Move ``old_key`` to ``new_key`` in every language that has it.

        Fails with Conflict, without writing anything, when ``new_key``
        exists in any language and ``overwrite`` is not set.
        """
        for path in (old_key, new_key):
            if not keypath.is_valid_key_path(path):
                return OperationResult.invalid_input(f"Invalid key path: {path!r}")
        if old_key == new_key:
            return OperationResult.invalid_input("oldKey and newKey are identical")
        if keypath.is_nested_path(old_key, new_key):
            return OperationResult.invalid_input(
                "oldKey and newKey cannot be nested inside each other"
            )

        with self._lock:
            try:
                manifest = self.store.read_manifest()
                documents = self._documents(manifest.codes)
            except Exception as exc:
                return classify_io_error(exc, action="rename_key")

            sources = [c for c, d in documents.items() if keypath.has_key(d, old_key)]
            if not sources:
                return OperationResult.not_found(f"Key '{old_key}' not found")

            targets = [
                c for c, d in documents.items()
                if keypath.has_key(d, new_key)
                or keypath.blocking_leaf(d, new_key) is not None
            ]
            if targets and not overwrite:
                return OperationResult.error(
                    OperationStatus.CONFLICT,
                    f"Key '{new_key}' already exists. Set overwrite=true to replace it.",
                    data={"key": new_key, "languages": targets},
                )

            results: List[Dict[str, Any]] = []
            errors: List[Dict[str, Any]] = []
            for code in sources:
                document = documents[code]
                try:
                    value = keypath.get_value(document, old_key)
                    keypath.delete_value(document, old_key)
                    keypath.set_value(document, new_key, value)
                    self.store.write_document(code, document)
                    results.append({"code": code, "value": value})
                except Exception as exc:
                    failure = classify_io_error(exc, action="rename_key")
                    errors.append({"code": code, "error": failure.message})

            logger.info(
                "key_renamed",
                old_key=old_key,
                new_key=new_key,
                renamed=len(results),
                failed=len(errors),
            )
            data = {
                "oldKey": old_key,
                "newKey": new_key,
                "successCount": len(results),
                "errorCount": len(errors),
                "results": results,
                "errors": errors or None,
            }
            return self._finish(
                f"Key '{old_key}' renamed to '{new_key}'",
                data,
                bool(results),
                action="rename_key",
            )

    def delete_key(self, key: str, clean_empty: bool = True) -> OperationResult:
        """Remove ``key`` from every language.

        A key found nowhere is a successful no-op without a version bump.
        """
        if not keypath.is_valid_key_path(key):
            return OperationResult.invalid_input(f"Invalid key path: {key!r}")

        with self._lock:
            try:
                manifest = self.store.read_manifest()
            except Exception as exc:
                return classify_io_error(exc, action="read_manifest")

            deleted_from: List[str] = []
            errors: List[Dict[str, Any]] = []
            for code in manifest.codes:
                try:
                    document = self.store.read_document(code)
                    if keypath.delete_value(document, key, prune=clean_empty):
                        self.store.write_document(code, document)
                        deleted_from.append(code)
                except FileNotFoundError:
                    continue
                except Exception as exc:
                    failure = classify_io_error(exc, action="delete_key")
                    errors.append({"code": code, "error": failure.message})

            data = {
                "key": key,
                "deleted": bool(deleted_from),
                "languages": deleted_from,
                "errors": errors or None,
            }
            if not deleted_from:
                logger.info("key_delete_noop", key=key)
                return OperationResult.success(
                    data=data, message=f"Key '{key}' not found, nothing deleted"
                )

            logger.info("key_deleted", key=key, languages=deleted_from)
            return self._finish(
                f"Key '{key}' deleted", data, True, action="delete_key"
            )

    # Languages

    def list_languages(self) -> OperationResult:
        try:
            manifest = self.store.read_manifest()
        except Exception as exc:
            return classify_io_error(exc, action="read_manifest")
        return OperationResult.success(data=manifest.to_document())

    def get_language(self, code: str) -> OperationResult:
        if not is_valid_language_code(code):
            return OperationResult.invalid_input(f"Invalid language code: {code!r}")
        try:
            document = self.store.read_document(code)
        except FileNotFoundError:
            return OperationResult.not_found(
                "Language file not found", error_code="LANGUAGE_NOT_FOUND"
            )
        except Exception as exc:
            return classify_io_error(exc, action="read_document")
        return OperationResult.success(data=document)

    def get_languages_batch(self, codes: List[str]) -> OperationResult:
        """Load several documents; missing or unreadable ones go to ``errors``."""
        results: Dict[str, Any] = {}
        errors: List[Dict[str, Any]] = []
        for code in codes:
            result = self.get_language(code)
            if result.is_success:
                results[code] = result.data
            else:
                errors.append({"code": code, "error": result.message})
        return OperationResult.success(
            data={"data": results, "errors": errors or None}
        )

    def replace_language(self, code: str, translations: Dict[str, Any]) -> OperationResult:
        """Overwrite the whole document of ``code``."""
        if not is_valid_language_code(code):
            return OperationResult.invalid_input(f"Invalid language code: {code!r}")
        if not isinstance(translations, dict):
            return OperationResult.invalid_input("translations must be a valid object")

        with self._lock:
            try:
                self.store.write_document(code, translations)
            except Exception as exc:
                return classify_io_error(exc, action="write_document")
            logger.info("language_replaced", code=code)
            return self._finish(
                f"Language file for {code} updated successfully",
                {"code": code, "translations": translations},
                True,
                action="replace_language",
            )

    def _template_document(self, manifest: Manifest, code: str) -> Dict[str, Any]:
        template_code = self.template_language or manifest.defaultLanguage
        if not template_code or template_code == code:
            return {}
        return keypath.blank_copy(self.store.read_document_or_empty(template_code))

    def add_language(
        self,
        code: str,
        name: str,
        native_name: str,
        enabled: bool = True,
        overwrite: bool = False,
    ) -> OperationResult:
        """Register a language and seed its document from the template.

        The seed keeps the template structure with every leaf cleared. When
        ``overwrite`` replaces an existing language, an existing document is
        kept as is.
        """
        if not is_valid_language_code(code):
            return OperationResult.invalid_input(f"Invalid language code: {code!r}")

        with self._lock:
            try:
                manifest = self.store.read_manifest()
                index = manifest.index_of(code)
                if index >= 0 and not overwrite:
                    return OperationResult.conflict(
                        f"Language with code {code} already exists. "
                        "Set overwrite=true to replace it."
                    )

                descriptor = LanguageDescriptor(
                    code=code, name=name, nativeName=native_name, enabled=enabled
                )
                if index >= 0:
                    manifest.languages[index] = descriptor
                else:
                    manifest.languages.append(descriptor)

                if not self.store.document_exists(code):
                    self.store.write_document(
                        code, self._template_document(manifest, code)
                    )
                self.store.write_manifest(manifest)
            except Exception as exc:
                return classify_io_error(exc, action="add_language")

            action = "updated" if index >= 0 else "added"
            logger.info("language_added", code=code, action=action)
            return self._finish(
                f"Language {code} {action} successfully",
                descriptor.model_dump(mode="json"),
                True,
                action="add_language",
            )

    def is_protected(self, code: str, manifest: Manifest) -> bool:
        return code in self.protected_languages or code in (
            manifest.defaultLanguage,
            manifest.fallbackLanguage,
        )

    def delete_language(self, code: str) -> OperationResult:
        """Remove a language and its document.

        Protected codes are refused before existence is checked.
        """
        with self._lock:
            try:
                manifest = self.store.read_manifest()
            except Exception as exc:
                return classify_io_error(exc, action="read_manifest")

            if self.is_protected(code, manifest):
                logger.warning("protected_language_delete_refused", code=code)
                return OperationResult.error(
                    OperationStatus.PROTECTED,
                    f"Cannot delete protected language: {code}",
                )

            index = manifest.index_of(code)
            if index < 0:
                return OperationResult.not_found(
                    f"Language with code {code} not found"
                )

            try:
                manifest.languages.pop(index)
                self.store.write_manifest(manifest)
                if is_valid_language_code(code):
                    self.store.delete_document(code)
            except Exception as exc:
                return classify_io_error(exc, action="delete_language")

            logger.info("language_deleted", code=code)
            return self._finish(
                f"Language {code} deleted successfully",
                {"code": code},
                True,
                action="delete_language",
            )

    def update_language_config(
        self,
        languages: List[Dict[str, Any]],
        default_language: Optional[str] = None,
        fallback_language: Optional[str] = None,
    ) -> OperationResult:
        """Replace the language list and defaults, keeping the version."""
        try:
            descriptors = [LanguageDescriptor.model_validate(item) for item in languages]
        except (TypeError, ValueError) as exc:
            return OperationResult.invalid_input(f"Invalid language list: {exc}")

        codes = [descriptor.code for descriptor in descriptors]
        duplicates = sorted({code for code in codes if codes.count(code) > 1})
        if duplicates:
            return OperationResult.invalid_input(
                f"Duplicate language codes: {', '.join(duplicates)}"
            )

        with self._lock:
            try:
                manifest = self.store.read_manifest()
                manifest.languages = descriptors
                manifest.defaultLanguage = default_language or self.store.default_language
                manifest.fallbackLanguage = (
                    fallback_language or self.store.fallback_language
                )
                self.store.write_manifest(manifest)
            except Exception as exc:
                return classify_io_error(exc, action="update_language_config")

            logger.info("language_config_updated", languages=codes)
            return self._finish(
                "Language configuration updated successfully",
                {
                    "languages": [d.model_dump(mode="json") for d in descriptors],
                    "defaultLanguage": manifest.defaultLanguage,
                    "fallbackLanguage": manifest.fallbackLanguage,
                },
                True,
                action="update_language_config",
            )

    # Aggregate reads

    def get_complete_data(self, include_disabled: bool = False) -> OperationResult:
        try:
            manifest = self.store.read_manifest()
            codes = [lang.code for lang in manifest.selected(include_disabled)]
            messages = self.store.read_documents(codes)
        except Exception as exc:
            return classify_io_error(exc, action="read_complete_data")
        document = manifest.to_document()
        return OperationResult.success(
            data={
                "version": document["version"],
                "lastUpdated": document["lastUpdated"],
                "languages": document["languages"],
                "messages": messages,
                "defaultLanguage": document["defaultLanguage"],
                "fallbackLanguage": document["fallbackLanguage"],
            }
        )

    def get_enabled_messages(self, include_disabled: bool = False) -> OperationResult:
        try:
            manifest = self.store.read_manifest()
            codes = [lang.code for lang in manifest.selected(include_disabled)]
            messages = self.store.read_documents(codes)
        except Exception as exc:
            return classify_io_error(exc, action="read_enabled_messages")
        return OperationResult.success(
            data={"config": manifest.to_document(), "messages": messages}
        )

    def get_file_manifest(self) -> OperationResult:
        """Per-file version and modification time, for incremental clients."""
        try:
            manifest = self.store.read_manifest()
            files: Dict[str, Dict[str, Any]] = {
                self.store.manifest_path.name: {
                    "version": manifest.version,
                    "lastModified": self.store.modified_at(self.store.manifest_path),
                }
            }
            for path in self.store.list_document_files():
                files[f"languages/{path.name}"] = {
                    "version": manifest.version,
                    "lastModified": self.store.modified_at(path),
                }
        except Exception as exc:
            return classify_io_error(exc, action="read_file_manifest")
        return OperationResult.success(
            data={
                "version": manifest.version,
                "lastUpdated": manifest.lastUpdated,
                "files": files,
            }
        )

    def check_version(self, client_version: Optional[str]) -> OperationResult:
        try:
            manifest = self.store.read_manifest()
        except Exception as exc:
            return classify_io_error(exc, action="read_manifest")
        client = client_version or "0.0.0"
        return OperationResult.success(
            data={
                "needsUpdate": compare_versions(manifest.version, client) > 0,
                "clientVersion": client,
                "serverVersion": manifest.version,
                "lastUpdated": manifest.lastUpdated,
            }
        )

    # Packages

    def create_package(self) -> OperationResult:
        """Rebuild the archive for the current version.

        Safe to call at any time; this is the retry path after a bump whose
        build failed.
        """
        with self._lock:
            try:
                manifest = self.store.read_manifest()
                info = self.builder.build(manifest.version)
                self.policy.record_build()
            except Exception as exc:
                logger.error("package_create_failed", error=str(exc))
                return classify_io_error(exc, action="create_package")
        return OperationResult.success(
            data={
                "fileName": info.file_name,
                "version": info.version,
                "fileSize": info.file_size,
            },
            message="Language package created successfully",
        )

    def get_latest_package(self) -> OperationResult:
        """Archive info for the current version, building it if missing."""
        try:
            manifest = self.store.read_manifest()
            info = self.builder.get(manifest.version)
        except Exception as exc:
            return classify_io_error(exc, action="get_latest_package")

        if info is None:
            created = self.create_package()
            if not created.is_success:
                return created
            info = self.builder.get(created.data["version"])
            if info is None:
                return OperationResult.not_found("Language package not found")

        return OperationResult.success(
            data={
                "fileName": info.file_name,
                "version": info.version,
                "fileSize": info.file_size,
                "lastUpdated": manifest.lastUpdated,
            }
        )

    def find_package(self, file_name: str) -> OperationResult:
        path = self.builder.find(file_name)
        if path is None:
            return OperationResult.not_found("File not found or expired")
        return OperationResult.success(data=path)
