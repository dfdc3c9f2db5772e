"""Error hierarchy shared by the analytics core and the retrieval providers.

The core raises only :class:`InvalidInputError`. Retrieval providers raise
:class:`UpstreamError` subclasses so callers can tell a dead upstream from a
bad key or an exhausted quota before any data reaches the core.
"""

from typing import Any, Dict, Optional


class NewsPulseError(Exception):
    """Base exception for all newspulse errors."""

    def __init__(
        self,
        message: str,
        source_name: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.source_name = source_name
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "source_name": self.source_name,
            "details": self.details,
        }


class InvalidInputError(NewsPulseError):
    """A record handed to the core cannot be interpreted (e.g. unparseable date)."""

    def __init__(
        self,
        message: str,
        record: Any = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, source_name="core", details=details)
        self.record = record

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["record"] = repr(self.record) if self.record is not None else None
        return data


class UpstreamError(NewsPulseError):
    """Base class for failures talking to a news or price provider."""

    retryable = False

    def __init__(
        self,
        message: str,
        source_name: str = "",
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, source_name, details)
        self.status_code = status_code
        self.url = url

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({"status_code": self.status_code, "url": self.url})
        return data


class UpstreamUnavailable(UpstreamError):
    """Transport failure, 5xx response, or an error body from the provider."""

    retryable = True


class InvalidCredentials(UpstreamError):
    """API key missing or rejected (HTTP 401/403)."""


class RateLimited(UpstreamError):
    """Provider quota exhausted (HTTP 429)."""

    retryable = True

    def __init__(
        self,
        message: str,
        source_name: str = "",
        status_code: Optional[int] = 429,
        url: Optional[str] = None,
        retry_after_seconds: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, source_name, status_code, url, details)
        self.retry_after_seconds = retry_after_seconds

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["retry_after_seconds"] = self.retry_after_seconds
        return data
