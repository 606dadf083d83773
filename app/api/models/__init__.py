"""API Pydantic models."""
from app.api.models.errors import ErrorCodes, ErrorDetail, ErrorResponse
from app.api.models.requests import AuditRequest
from app.api.models.responses import AuditResponse, HealthResponse

__all__ = [
    "AuditRequest",
    "AuditResponse",
    "HealthResponse",
    "ErrorResponse",
    "ErrorDetail",
    "ErrorCodes",
]
