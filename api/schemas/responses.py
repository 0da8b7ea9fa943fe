"""Response envelopes shared by every endpoint."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """What went wrong, in machine- and human-readable form."""

    code: str = Field(..., description="Error kind, e.g. fetch_error or fetch_timeout")
    message: str = Field(..., description="Message suitable for showing to the user")
    field: str | None = Field(None, description="Request field at fault, if any")
    details: dict[str, Any] | None = Field(None, description="Structured context")


class ErrorResponse(BaseModel):
    """Body of every non-2xx JSON response."""

    error: ErrorDetail


class DataResponse(BaseModel, Generic[T]):
    """Body of every successful JSON response."""

    data: T


def error_body(
    code: str,
    message: str,
    field: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build an error envelope, leaving out empty optional parts."""
    detail = ErrorDetail(code=code, message=message, field=field, details=details or None)
    return ErrorResponse(error=detail).model_dump(exclude_none=True)
