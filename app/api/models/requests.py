"""API request models."""
from __future__ import annotations

from pydantic import BaseModel, Field, HttpUrl, field_validator

from seo_auditor.config.settings import settings


class AuditRequest(BaseModel):
    """Request body for a page audit."""

    url: HttpUrl = Field(
        ...,
        description="URL of the page; fetched when html is omitted",
        examples=["https://example.com/article"],
    )
    html: str | None = Field(
        default=None,
        description="Raw HTML to audit instead of fetching the URL",
        max_length=settings.fetcher.max_response_size,
    )

    @field_validator("url")
    @classmethod
    def validate_url_scheme(cls, v: HttpUrl) -> HttpUrl:
        """Ensure URL uses http or https."""
        if str(v).startswith(("http://", "https://")):
            return v
        raise ValueError("Only http and https URLs are supported")
