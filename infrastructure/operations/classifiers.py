"""Error classifiers for file-system exceptions.

Converts exceptions raised while reading or writing the manifest, language
documents and archives into standardized OperationResult objects, so no
operation surfaces an unstructured failure to its caller.

Usage:
    from infrastructure.operations.classifiers import classify_io_error

    try:
        document = store.read_document(code)
    except Exception as exc:
        return classify_io_error(exc, action="read_document")
"""

import json
import zipfile
from typing import Optional

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus


def classify_io_error(exc: Exception, action: Optional[str] = None) -> OperationResult:
    """Classify a storage exception into an OperationResult.

    Mapping:
    - FileNotFoundError: missing file → NOT_FOUND
    - json.JSONDecodeError: corrupt document → IO_FAILURE (INVALID_JSON)
    - zipfile.BadZipFile / zipfile.LargeZipFile → IO_FAILURE (ARCHIVE_ERROR)
    - PermissionError → IO_FAILURE (PERMISSION_DENIED)
    - Other OSError → IO_FAILURE (IO_ERROR)
    - ValueError → INVALID_INPUT
    - Anything else → IO_FAILURE (UNKNOWN_ERROR)

    Args:
        exc: Exception raised by the storage layer
        action: Optional operation name used as a message prefix

    Returns:
        OperationResult with the matching status and error_code
    """
    prefix = f"{action} failed: " if action else ""

    if isinstance(exc, FileNotFoundError):
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            f"{prefix}file not found: {exc.filename or exc}",
            error_code="NOT_FOUND",
        )

    # JSONDecodeError subclasses ValueError, check it first
    if isinstance(exc, json.JSONDecodeError):
        return OperationResult.error(
            OperationStatus.IO_FAILURE,
            f"{prefix}invalid JSON document: {exc}",
            error_code="INVALID_JSON",
        )

    if isinstance(exc, (zipfile.BadZipFile, zipfile.LargeZipFile)):
        return OperationResult.error(
            OperationStatus.IO_FAILURE,
            f"{prefix}archive error: {exc}",
            error_code="ARCHIVE_ERROR",
        )

    if isinstance(exc, PermissionError):
        return OperationResult.error(
            OperationStatus.IO_FAILURE,
            f"{prefix}permission denied: {exc}",
            error_code="PERMISSION_DENIED",
        )

    if isinstance(exc, OSError):
        return OperationResult.error(
            OperationStatus.IO_FAILURE,
            f"{prefix}{type(exc).__name__}: {exc}",
            error_code="IO_ERROR",
        )

    if isinstance(exc, ValueError):
        return OperationResult.error(
            OperationStatus.INVALID_INPUT,
            f"{prefix}{exc}",
            error_code="INVALID_INPUT",
        )

    return OperationResult.error(
        OperationStatus.IO_FAILURE,
        f"{prefix}{type(exc).__name__}: {exc}",
        error_code="UNKNOWN_ERROR",
    )
