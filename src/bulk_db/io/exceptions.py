"""Errors raised by the bulk operators and connection adapters."""

from typing import Any, Dict, Optional


class BulkOperatorError(Exception):
    """Base class for every bulk-db error."""


class ConfigurationError(BulkOperatorError, ValueError):
    """Raised when an operator or connection adapter is misconfigured."""


class InvalidInputError(BulkOperatorError, ValueError):
    """Raised when queued values do not match the operator's field count."""


class ExecutionError(BulkOperatorError):
    """Raised when the driver fails to execute a batch statement.

    The batch that failed is still pending on the operator, so calling
    ``flush()`` again retries it with the same parameters.
    """

    def __init__(
        self,
        message: str,
        *,
        operations: int,
        original_error: Optional[BaseException] = None,
    ):
        self.operations = operations
        self.original_error = original_error
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to structured dict for logging."""
        return {
            "error_type": type(self).__name__,
            "operations": self.operations,
            "message": str(self),
            "original_error_type": type(self.original_error).__name__
            if self.original_error is not None
            else None,
            "original_error_message": str(self.original_error)
            if self.original_error is not None
            else None,
        }
