"""Health check endpoint."""
from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

from app.api.models.responses import HealthResponse
from seo_auditor import __version__
from seo_auditor.audit.base import Category, Status
from seo_auditor.audit.registry import default_registry
from seo_auditor.parser.document import parse_document
from seo_auditor.scoring.aggregator import normalize_score

router = APIRouter(tags=["Health"])


def _run_checks() -> dict[str, bool]:
    return {
        "html_parser": parse_document("<p>ok</p>").find("p") is not None,
        "extractors": set(default_registry().list_categories()) == set(Category),
        "scoring": normalize_score([Status.GOOD, Status.CRITICAL]) == 50,
    }


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Report whether the parser, extractor set and scorer are usable.",
)
async def health_check() -> HealthResponse:
    checks = _run_checks()
    return HealthResponse(
        status="healthy" if all(checks.values()) else "degraded",
        version=__version__,
        timestamp=datetime.now(UTC),
        checks=checks,
    )
