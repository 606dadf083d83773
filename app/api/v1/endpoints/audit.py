"""Page audit endpoint."""
from __future__ import annotations

import logging

import requests
from fastapi import APIRouter, HTTPException, status

from app.api.models.errors import ErrorCodes, ErrorResponse, error_detail
from app.api.models.requests import AuditRequest
from app.api.models.responses import AuditResponse
from seo_auditor.auditor import audit_html
from seo_auditor.config.settings import settings
from seo_auditor.fetcher.html_fetcher import fetch_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Audit"])


@router.post(
    "/audit",
    response_model=AuditResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or blocked URL"},
        500: {"model": ErrorResponse, "description": "Audit failed"},
        502: {"model": ErrorResponse, "description": "Page could not be fetched"},
    },
    summary="Audit a page",
    description="""
Audit one page and return per-category scores, signals and recommendations.

When `html` is supplied it is audited as-is and nothing is fetched. Otherwise
the URL is fetched (http/https only, private addresses refused) and the
response headers and load time feed the security and performance checks.
""",
)
def audit_page(body: AuditRequest) -> AuditResponse:
    """Audit the submitted HTML, or fetch and audit the URL."""
    url_str = str(body.url)

    if body.html is not None:
        result = audit_html(url_str, body.html)
    else:
        if not settings.api.allow_fetch:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_detail(
                    ErrorCodes.FETCH_DISABLED,
                    "Fetching is disabled; submit the page html",
                    url=url_str,
                ),
            )
        try:
            page = fetch_page(url_str)
        except ValueError as e:
            code = ErrorCodes.URL_BLOCKED_SSRF if "SSRF" in str(e) else ErrorCodes.INVALID_URL
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=error_detail(code, str(e), url=url_str),
            ) from e
        except requests.RequestException as e:
            logger.warning("Fetch failed for %s: %s", url_str, e)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=error_detail(
                    ErrorCodes.URL_NOT_ACCESSIBLE,
                    "Could not fetch the page",
                    url=url_str,
                    reason=str(e),
                ),
            ) from e
        result = audit_html(page.final_url, page.html, page.headers, page.load_time_seconds)

    if not result.success:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=error_detail(ErrorCodes.AUDIT_FAILED, result.error or "Audit failed", url=url_str),
        )

    return AuditResponse.model_validate(result.to_dict())
