"""Audit orchestration: parse, analyze, extract, score, recommend."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from seo_auditor.audit.base import Category, CategoryReport
from seo_auditor.audit.registry import ExtractorRegistry, default_registry
from seo_auditor.parser.document import parse_document
from seo_auditor.parser.readability import analyze_document
from seo_auditor.scoring.aggregator import category_scores, grade_for, overall_score
from seo_auditor.scoring.recommendations import Recommendation, generate_recommendations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditInput:
    """Everything one audit needs; headers and load time come from the fetcher."""
    url: str
    html: str
    headers: Mapping[str, str] | None = None
    load_time_seconds: float | None = None


@dataclass
class AuditResult:
    """Outcome of a single page audit.

    Attributes:
        url: Audited URL
        reports: Facts and signals keyed by category
        category_scores: 0-100 score per category
        overall_score: 0-100 score over every signal
        grade: Letter grade for the overall score
        recommendations: Fixes ordered by priority then impact
        success: False when the audit aborted
        error: Failure message when success is False
        audited_at: UTC time the audit finished
    """
    url: str
    reports: dict[Category, CategoryReport] = field(default_factory=dict)
    category_scores: dict[Category, int] = field(default_factory=dict)
    overall_score: int = 0
    grade: str = "F"
    recommendations: list[Recommendation] = field(default_factory=list)
    success: bool = True
    error: str | None = None
    audited_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def facts(self, category: Category) -> dict[str, Any]:
        report = self.reports.get(category)
        return report.facts if report else {}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "url": self.url,
            "success": self.success,
            "error": self.error,
            "audited_at": self.audited_at.isoformat(),
            "overall_score": self.overall_score,
            "grade": self.grade,
            "category_scores": {
                category.value: score for category, score in self.category_scores.items()
            },
            "categories": {
                category.value: report.to_dict() for category, report in self.reports.items()
            },
            "recommendations": [rec.to_dict() for rec in self.recommendations],
        }


def run_audit(audit_input: AuditInput, registry: ExtractorRegistry | None = None) -> AuditResult:
    """Audit one HTML document.

    Never raises: an unexpected failure is logged and reported through
    ``success=False`` and ``error``.
    """
    registry = registry or default_registry()
    try:
        doc = parse_document(audit_input.html)
        text_analysis = analyze_document(doc)
        reports = registry.run_all(
            doc,
            audit_input.url,
            text_analysis=text_analysis,
            html=audit_input.html or "",
            headers=audit_input.headers,
            load_time_seconds=audit_input.load_time_seconds,
        )
        scores = category_scores(reports)
        overall = overall_score(reports)
        recommendations = generate_recommendations(reports)
    except Exception as exc:
        logger.exception("Audit failed for %s", audit_input.url)
        return AuditResult(url=audit_input.url, success=False, error=f"An error occurred: {exc}")

    logger.info("Audited %s: score %d, %d recommendations", audit_input.url, overall, len(recommendations))
    return AuditResult(
        url=audit_input.url,
        reports=reports,
        category_scores=scores,
        overall_score=overall,
        grade=grade_for(overall),
        recommendations=recommendations,
    )


def audit_html(
    url: str,
    html: str,
    headers: Mapping[str, str] | None = None,
    load_time_seconds: float | None = None,
) -> AuditResult:
    """Convenience wrapper around run_audit for raw HTML."""
    return run_audit(AuditInput(url, html, headers, load_time_seconds))
