"""
Error Handling Module

Defines the transaction error taxonomy, error records and domain exceptions.
Domain exceptions are pure and have no external dependencies.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ErrorCode(IntEnum):
    """
    Discriminated failure kinds for transactions.

    Numeric values are part of the public contract: they are serialized
    in API responses and logs and must never be renumbered.
    """

    UNKNOWN = 0
    DOCUMENT_EXPIRED = 1
    INVALID_STORED_TYPE = 2
    INVALID_ACCESS_KEY = 3
    INVALID_PATH = 4


# User-friendly error messages with actionable guidance
ERROR_MESSAGES: Dict[ErrorCode, Dict[str, str]] = {
    ErrorCode.UNKNOWN: {
        "title": "Transaction Error",
        "message": "The transaction could not be processed.",
        "action": "Please try again later. If the problem persists, contact support.",
    },
    ErrorCode.DOCUMENT_EXPIRED: {
        "title": "Document Expired",
        "message": "The document token has expired or does not exist.",
        "action": "Request a new token for this document.",
    },
    ErrorCode.INVALID_STORED_TYPE: {
        "title": "Invalid Stored Document",
        "message": "The token does not reference a downloadable document.",
        "action": "Check the token and request a new one if needed.",
    },
    ErrorCode.INVALID_ACCESS_KEY: {
        "title": "Invalid Access Key",
        "message": "The access key does not match the one given for this token.",
        "action": "Provide the access key used when the token was issued.",
    },
    ErrorCode.INVALID_PATH: {
        "title": "Document Not Found",
        "message": "The document does not exist on the server.",
        "action": "Check the document path and try again.",
    },
}


@dataclass(frozen=True)
class ErrorRecord:
    """
    Immutable (code, message) pair attached to a transaction.

    Consumers branch on ``code``; ``message`` is for humans only.
    """

    code: ErrorCode
    message: str = "Transaction error"

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": int(self.code),
            "name": self.code.name,
            "message": self.message,
        }


# ============================================================================
# Domain Exceptions (Pure - No External Dependencies)
# ============================================================================

class DomainError(Exception):
    """
    Base exception for all domain errors.

    Domain exceptions can optionally wrap original errors for context.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        """
        Initialize domain error.

        Args:
            message: Error message
            original_error: Optional original exception that caused this error
        """
        super().__init__(message)
        self.original_error = original_error


class TransactionStoreError(DomainError):
    """
    Raised when the transaction store cannot be reached.

    This is the fatal channel: it is never converted into an error record
    and callers decide whether to retry.
    """
    pass


class TransactionRejectedError(DomainError):
    """
    Raised when a rejected registration or retrieval is unwrapped.

    Carries the ordered error records of the rejected transaction.
    """

    def __init__(self, reasons: List[ErrorRecord], locator: Optional[str] = None):
        self.reasons = list(reasons)
        self.locator = locator
        super().__init__("|".join(str(reason) for reason in self.reasons))

    @property
    def code(self) -> ErrorCode:
        """Code of the first recorded error."""
        if not self.reasons:
            return ErrorCode.UNKNOWN
        return self.reasons[0].code

    def has_code(self, code: ErrorCode) -> bool:
        """Check whether any recorded error has the given code."""
        return any(reason.code == code for reason in self.reasons)


def create_error_response(
    code: ErrorCode,
    reasons: Optional[List[ErrorRecord]] = None,
    status_code: int = 400,
) -> tuple[Dict[str, Any], int]:
    """
    Create a structured error response for API endpoints.

    Args:
        code: Primary error code
        reasons: All error records, in the order they were recorded
        status_code: HTTP status code

    Returns:
        Tuple of (error_dict, status_code)
    """
    error_info = ERROR_MESSAGES.get(code, ERROR_MESSAGES[ErrorCode.UNKNOWN])
    body = {
        "error": code.name.lower(),
        "code": int(code),
        "title": error_info["title"],
        "message": error_info["message"],
        "action": error_info["action"],
        "reasons": [reason.to_dict() for reason in (reasons or [])],
    }
    return body, status_code
