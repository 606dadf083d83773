"""API error response models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": "URL_NOT_ACCESSIBLE",
                    "message": "Could not fetch the page",
                    "details": {"url": "https://example.com", "reason": "Read timed out"},
                }
            }
        }
    }


class ErrorCodes:
    """Standardized error codes."""

    # 4xx Client Errors
    INVALID_URL = "INVALID_URL"
    URL_BLOCKED_SSRF = "URL_BLOCKED_SSRF"
    FETCH_DISABLED = "FETCH_DISABLED"

    # 5xx Server Errors
    URL_NOT_ACCESSIBLE = "URL_NOT_ACCESSIBLE"
    AUDIT_FAILED = "AUDIT_FAILED"


def error_detail(code: str, message: str, **details: Any) -> dict[str, Any]:
    """Build the HTTPException detail payload in the ErrorResponse shape."""
    return ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details or None)
    ).model_dump()
