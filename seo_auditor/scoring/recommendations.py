"""Recommendation generation from assembled category reports."""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from seo_auditor.audit.base import Category, CategoryReport
from seo_auditor.config.settings import settings


class Priority(Enum):
    """Recommendation priority; higher value sorts first."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class RecommendationCategory(Enum):
    META_TAGS = "MetaTags"
    CONTENT = "Content"
    PERFORMANCE = "Performance"
    SECURITY = "Security"
    LINKS = "Links"
    CRAWLABILITY = "Crawlability"
    MOBILE = "Mobile"
    ADVANCED = "Advanced"


@dataclass(frozen=True)
class Recommendation:
    """A prioritized, actionable fix for the audited page."""
    category: RecommendationCategory
    priority: Priority
    message: str
    actionable_advice: str
    impact_score: int

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "priority": self.priority.name.capitalize(),
            "message": self.message,
            "actionable_advice": self.actionable_advice,
            "impact_score": self.impact_score,
        }


class _Facts:
    """Read-only view over every report's facts."""

    def __init__(self, reports: Mapping[Category, CategoryReport]):
        self._reports = reports

    def get(self, category: Category, key: str, default: Any = None) -> Any:
        report = self._reports.get(category)
        if report is None:
            return default
        return report.facts.get(key, default)


Rule = Callable[[_Facts], "Recommendation | None"]


def _title_rule(facts: _Facts) -> Recommendation | None:
    seo = settings.seo
    title = facts.get(Category.METADATA, "title")
    if not title:
        return Recommendation(
            RecommendationCategory.META_TAGS, Priority.CRITICAL,
            "Missing Title Tag",
            "Add a descriptive <title> tag to the <head> section.",
            10,
        )
    length = len(title)
    if not seo.title_min_length <= length <= seo.title_max_length:
        return Recommendation(
            RecommendationCategory.META_TAGS, Priority.MEDIUM,
            f"Title length is {length} characters "
            f"(Recommended: {seo.title_min_length}-{seo.title_max_length})",
            f"Update page title to be between {seo.title_min_length} "
            f"and {seo.title_max_length} characters.",
            5,
        )
    return None


def _description_rule(facts: _Facts) -> Recommendation | None:
    if facts.get(Category.METADATA, "meta_description"):
        return None
    return Recommendation(
        RecommendationCategory.META_TAGS, Priority.HIGH,
        "Missing Meta Description",
        'Add a <meta name="description"> tag summarizing the page content.',
        8,
    )


def _h1_rule(facts: _Facts) -> Recommendation | None:
    count = facts.get(Category.CONTENT, "h1_count", 0)
    if count == 0:
        return Recommendation(
            RecommendationCategory.CONTENT, Priority.HIGH,
            "Missing H1 Heading",
            "Ensure the page has exactly one <h1> tag describing the main topic.",
            10,
        )
    if count > 1:
        return Recommendation(
            RecommendationCategory.CONTENT, Priority.MEDIUM,
            "Multiple H1 Tags Found",
            "Use only one <h1> tag per page. Use <h2>-<h6> for subsections.",
            5,
        )
    return None


def _image_alt_rule(facts: _Facts) -> Recommendation | None:
    missing = facts.get(Category.IMAGES, "images_without_alt", 0)
    if not missing:
        return None
    return Recommendation(
        RecommendationCategory.CONTENT, Priority.HIGH,
        f"{missing} Images Missing Alt Text",
        "Add descriptive 'alt' attributes to all <img> tags for accessibility and SEO.",
        5,
    )


def _word_count_rule(facts: _Facts) -> Recommendation | None:
    minimum = settings.content.min_content_words
    if facts.get(Category.CONTENT, "word_count", 0) >= minimum:
        return None
    return Recommendation(
        RecommendationCategory.CONTENT, Priority.MEDIUM,
        "Low Word Count",
        f"Consider adding more substantial content (at least {minimum} words).",
        5,
    )


def _load_time_rule(facts: _Facts) -> Recommendation | None:
    limit = settings.performance.load_time_good
    load_time = facts.get(Category.PERFORMANCE, "load_time_seconds")
    if load_time is None or load_time <= limit:
        return None
    return Recommendation(
        RecommendationCategory.PERFORMANCE, Priority.HIGH,
        f"Slow Page Load: {load_time}s",
        f"Optimize images, minify CSS/JS, and use caching to reduce load time below {limit}s.",
        8,
    )


def _request_count_rule(facts: _Facts) -> Recommendation | None:
    total = facts.get(Category.PERFORMANCE, "total_resources_count", 0)
    if total <= settings.performance.max_resources:
        return None
    return Recommendation(
        RecommendationCategory.PERFORMANCE, Priority.MEDIUM,
        f"High Request Count: {total}",
        "Combine CSS/JS files and use sprites to reduce HTTP requests.",
        5,
    )


def _https_rule(facts: _Facts) -> Recommendation | None:
    if facts.get(Category.SECURITY, "is_https", False):
        return None
    return Recommendation(
        RecommendationCategory.SECURITY, Priority.CRITICAL,
        "Not Using HTTPS",
        "Install an SSL certificate and redirect all traffic to HTTPS.",
        10,
    )


def _anchor_text_rule(facts: _Facts) -> Recommendation | None:
    missing = facts.get(Category.LINKS, "links_without_anchor_text", 0)
    if not missing:
        return None
    return Recommendation(
        RecommendationCategory.LINKS, Priority.MEDIUM,
        f"{missing} Links Missing Anchor Text",
        "Ensure all <a> tags have descriptive text inside them.",
        3,
    )


def _canonical_rule(facts: _Facts) -> Recommendation | None:
    if facts.get(Category.TECHNICAL, "canonical_present", False):
        return None
    return Recommendation(
        RecommendationCategory.CRAWLABILITY, Priority.MEDIUM,
        "Missing Canonical Tag",
        'Add a <link rel="canonical"> tag to prevent duplicate content issues.',
        5,
    )


def _noindex_rule(facts: _Facts) -> Recommendation | None:
    if not facts.get(Category.METADATA, "meta_noindex", False):
        return None
    return Recommendation(
        RecommendationCategory.CRAWLABILITY, Priority.HIGH,
        "Page is NoIndexed",
        "Remove 'noindex' from meta robots if you want this page to appear in search results.",
        10,
    )


def _viewport_rule(facts: _Facts) -> Recommendation | None:
    if facts.get(Category.METADATA, "viewport") is not None:
        return None
    return Recommendation(
        RecommendationCategory.MOBILE, Priority.HIGH,
        "Missing Viewport Meta Tag",
        'Add <meta name="viewport" content="width=device-width, initial-scale=1"> '
        "so the page renders correctly on mobile devices.",
        8,
    )


def _json_ld_rule(facts: _Facts) -> Recommendation | None:
    invalid = facts.get(Category.STRUCTURED_DATA, "invalid_json_ld_count", 0)
    if not invalid:
        return None
    return Recommendation(
        RecommendationCategory.ADVANCED, Priority.MEDIUM,
        f"{invalid} Invalid JSON-LD Block(s)",
        "Fix the syntax of <script type=\"application/ld+json\"> blocks so search "
        "engines can read the structured data.",
        4,
    )


def _deprecated_markup_rule(facts: _Facts) -> Recommendation | None:
    tags = facts.get(Category.DEPRECATED_MARKUP, "deprecated_tags", [])
    has_flash = facts.get(Category.DEPRECATED_MARKUP, "has_flash", False)
    if not tags and not has_flash:
        return None
    found = [f"<{tag}>" for tag in tags]
    if has_flash:
        found.append("Flash")
    return Recommendation(
        RecommendationCategory.ADVANCED, Priority.MEDIUM,
        f"Deprecated Markup Found: {', '.join(found)}",
        "Replace obsolete tags with CSS and remove Flash content.",
        3,
    )


_SECURITY_HEADER_FACTS = {
    "has_hsts": "Strict-Transport-Security",
    "has_x_content_type_options": "X-Content-Type-Options",
    "has_x_frame_options": "X-Frame-Options",
}


def _security_headers_rule(facts: _Facts) -> Recommendation | None:
    # None means the headers were never supplied, so nothing can be concluded
    missing = [
        header for key, header in _SECURITY_HEADER_FACTS.items()
        if facts.get(Category.SECURITY, key) is False
    ]
    if not missing:
        return None
    return Recommendation(
        RecommendationCategory.SECURITY, Priority.LOW,
        f"Missing Security Headers: {', '.join(missing)}",
        "Configure the web server to send the missing security headers.",
        2,
    )


RULES: list[Rule] = [
    _title_rule,
    _description_rule,
    _h1_rule,
    _image_alt_rule,
    _word_count_rule,
    _load_time_rule,
    _request_count_rule,
    _https_rule,
    _anchor_text_rule,
    _canonical_rule,
    _noindex_rule,
    _viewport_rule,
    _json_ld_rule,
    _deprecated_markup_rule,
    _security_headers_rule,
]


def sort_recommendations(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Order by priority, then impact, highest first. Ties keep rule order."""
    return sorted(
        recommendations,
        key=lambda rec: (rec.priority.value, rec.impact_score),
        reverse=True,
    )


def generate_recommendations(reports: Mapping[Category, CategoryReport]) -> list[Recommendation]:
    """Evaluate every rule once against the collected facts."""
    facts = _Facts(reports)
    found = []
    for rule in RULES:
        recommendation = rule(facts)
        if recommendation is not None:
            found.append(recommendation)
    return sort_recommendations(found)
