"""Operation result dataclass.

Service operations never raise for expected failures; they return an
OperationResult whose status the HTTP layer maps to a status code.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of a store or service operation.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message, returned as ``error`` on failure
        data: Optional[Any] -- payload, also attached to some failures
            (e.g. the languages that already hold a conflicting key)
        error_code: Optional[str] -- machine error code, set on failures
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Create a failed result.

        Args:
            status: OperationStatus indicating the failure kind
            message: Human-friendly error message
            error_code: Machine error code, defaults to the upper-cased
                status value (``NOT_FOUND``, ``CONFLICT``...)
            data: Optional payload describing the failure
        """
        return cls(
            status=status,
            message=message,
            error_code=error_code or status.value.upper(),
            data=data,
        )

    @classmethod
    def not_found(cls, message: str, error_code: Optional[str] = None):
        return cls.error(OperationStatus.NOT_FOUND, message, error_code)

    @classmethod
    def conflict(cls, message: str, error_code: Optional[str] = None):
        return cls.error(OperationStatus.CONFLICT, message, error_code)

    @classmethod
    def invalid_input(cls, message: str, error_code: Optional[str] = None):
        return cls.error(OperationStatus.INVALID_INPUT, message, error_code)

    def log_fields(self) -> Dict[str, Any]:
        """Fields describing the result in a structured log entry."""
        fields: Dict[str, Any] = {"status": self.status.value}
        if not self.is_success:
            fields["error_code"] = self.error_code
            fields["error"] = self.message
        return fields
