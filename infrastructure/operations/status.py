"""Operation status enumeration.

Status codes for operation results, used to classify outcomes of translation
store operations so the HTTP layer can map them to response codes.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        NOT_FOUND: Language, document or archive absent
        CONFLICT: Duplicate language code or translation key
        PROTECTED: Attempt to remove a protected language
        INVALID_INPUT: Malformed body, bad key path or language code
        IO_FAILURE: Underlying read, write or archive failure
    """

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    PROTECTED = "protected"
    INVALID_INPUT = "invalid_input"
    IO_FAILURE = "io_failure"
