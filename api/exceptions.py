"""Custom exceptions and error handling."""

from typing import Any

from fastapi import status


class BenchmarkError(Exception):
    """Base exception for the website benchmark application."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ValidationError(BenchmarkError):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="validation_error",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class FetchError(BenchmarkError):
    """Markup could not be retrieved through the relay.

    Carries the relay's HTTP status when one was received, otherwise the
    transport failure that prevented a response.
    """

    def __init__(
        self,
        url: str,
        status: int | None = None,
        cause: str | None = None,
        attempts: list[str] | None = None,
    ):
        if status is not None:
            message = f"Failed to fetch {url}: relay returned HTTP {status}"
        else:
            message = f"Failed to fetch {url}: {cause or 'unknown error'}"

        details: dict[str, Any] = {"url": url, "status": status, "cause": cause}
        if attempts:
            details["attempts"] = attempts

        self.url = url
        self.status = status
        self.cause = cause
        self.attempts = attempts or []
        super().__init__(
            message=message,
            code="fetch_error",
            status_code=502,  # Bad Gateway
            details=details,
        )


class FetchTimeoutError(BenchmarkError):
    """The caller's deadline passed before the markup arrived."""

    def __init__(self, url: str, timeout: float | None = None):
        if timeout is not None:
            message = f"Timed out fetching {url} after {timeout:g}s"
        else:
            message = f"Timed out fetching {url}"
        self.url = url
        self.timeout = timeout
        super().__init__(
            message=message,
            code="fetch_timeout",
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            details={"url": url, "timeout": timeout},
        )
