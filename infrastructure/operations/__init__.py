"""Operation result types and status enums.

This module contains standardized result types for store and service
operations, including the status enum, the result dataclass, and the
classifier that turns storage exceptions into results.
"""

from infrastructure.operations.classifiers import classify_io_error
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_io_error",
]
