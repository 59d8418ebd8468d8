"""
Custom exceptions for the remote API client.

The validation core never raises these: they describe failures of the
fetch / submit calls made before and after the pipeline runs.
"""

from typing import Any


class TransportError(Exception):
    """
    Base exception for all remote API errors.

    Every transport failure inherits from this to allow catching any of them
    with a single except clause.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class TransportConnectionError(TransportError):
    """
    Raised when the remote API cannot be reached.

    Includes network errors, DNS failures, refused connections, etc.
    Retried with backoff.
    """
    pass


class TransportTimeoutError(TransportConnectionError):
    """Raised when a request exceeds the configured timeout."""
    pass


class TransportStatusError(TransportError):
    """
    Raised when the remote API answers with a status other than 200.

    5xx responses are retried before this is raised; 4xx are not.
    """

    def __init__(self, message: str, status_code: int, body: str | None = None):
        details: dict[str, Any] = {"status": status_code}
        if body:
            # Avoid excessive logging
            details["body_snippet"] = body[:500]
        super().__init__(message, details)
        self.status_code = status_code


class SchemaError(Exception):
    """
    Raised when a response payload does not match the expected shape.

    Not retried: the same payload would fail again.
    """

    def __init__(self, message: str, validation_errors: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.validation_errors = validation_errors or []
        self.details = (
            {"validation_errors": self.validation_errors} if self.validation_errors else {}
        )

    def __str__(self) -> str:
        if self.validation_errors:
            return f"{self.message} | Details: {self.details}"
        return self.message
