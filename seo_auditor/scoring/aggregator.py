"""Category and overall score aggregation.

Each scored status contributes points (Good +5, Warning -3, Critical -10).
The point total is normalized against the best and worst possible totals for
the same number of signals, so categories with different signal counts are
comparable on a 0-100 scale.
"""
from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from seo_auditor.audit.base import Category, CategoryReport, Status
from seo_auditor.config.settings import settings

STATUS_POINTS = {
    Status.GOOD: 5,
    Status.WARNING: -3,
    Status.CRITICAL: -10,
}
MAX_POINTS = STATUS_POINTS[Status.GOOD]
MIN_POINTS = STATUS_POINTS[Status.CRITICAL]


def normalize_score(statuses: Iterable[Status]) -> int:
    """Normalize statuses to an integer score in [0, 100].

    INFO and UNKNOWN statuses are ignored. With nothing left to score the
    result is 0.
    """
    scored = [status for status in statuses if status.is_scored]
    if not scored:
        return 0

    points = sum(STATUS_POINTS[status] for status in scored)
    best = MAX_POINTS * len(scored)
    worst = MIN_POINTS * len(scored)
    raw = (points - worst) / (best - worst) * 100
    raw = max(0.0, min(100.0, raw))
    return int(math.floor(raw + 0.5))


def category_scores(reports: Mapping[Category, CategoryReport]) -> dict[Category, int]:
    return {category: normalize_score(report.statuses) for category, report in reports.items()}


def overall_score(reports: Mapping[Category, CategoryReport]) -> int:
    """Score every signal of every category as one pool."""
    return normalize_score(
        status for report in reports.values() for status in report.statuses
    )


def grade_for(score: int) -> str:
    grades = settings.grades
    if score >= grades.grade_a_threshold:
        return "A"
    if score >= grades.grade_b_threshold:
        return "B"
    if score >= grades.grade_c_threshold:
        return "C"
    if score >= grades.grade_d_threshold:
        return "D"
    return "F"
