"""Unit tests for recommendation generation."""
from __future__ import annotations

from seo_auditor.audit.base import Category, CategoryReport
from seo_auditor.scoring.recommendations import (
    Priority,
    Recommendation,
    RecommendationCategory,
    generate_recommendations,
    sort_recommendations,
)

GOOD_FACTS = {
    Category.METADATA: {
        "title": "A Practical Guide to On-Page SEO Audits, 2024",
        "meta_description": "A description that exists.",
        "meta_noindex": False,
        "viewport": "width=device-width",
    },
    Category.CONTENT: {"h1_count": 1, "word_count": 800},
    Category.IMAGES: {"images_without_alt": 0},
    Category.PERFORMANCE: {"load_time_seconds": 1.1, "total_resources_count": 12},
    Category.SECURITY: {
        "is_https": True,
        "has_hsts": None,
        "has_x_content_type_options": None,
        "has_x_frame_options": None,
    },
    Category.LINKS: {"links_without_anchor_text": 0},
    Category.TECHNICAL: {"canonical_present": True},
    Category.STRUCTURED_DATA: {"invalid_json_ld_count": 0},
    Category.DEPRECATED_MARKUP: {"deprecated_tags": [], "has_flash": False},
}


def _reports(**overrides) -> dict[Category, CategoryReport]:
    """Build reports from GOOD_FACTS with per-category fact overrides.

    Keyword names are Category values, e.g. metadata={"title": None}.
    """
    reports = {}
    for category, facts in GOOD_FACTS.items():
        merged = dict(facts)
        merged.update(overrides.get(category.value, {}))
        reports[category] = CategoryReport(category, facts=merged)
    return reports


def _messages(recommendations: list[Recommendation]) -> list[str]:
    return [rec.message for rec in recommendations]


class TestRules:
    """Tests for individual recommendation rules."""

    def test_clean_page_has_no_recommendations(self):
        assert generate_recommendations(_reports()) == []

    def test_missing_title(self):
        recs = generate_recommendations(_reports(metadata={"title": None}))
        rec = recs[0]
        assert rec.message == "Missing Title Tag"
        assert rec.category == RecommendationCategory.META_TAGS
        assert rec.priority == Priority.CRITICAL
        assert rec.impact_score == 10

    def test_empty_title_counts_as_missing(self):
        recs = generate_recommendations(_reports(metadata={"title": ""}))
        assert _messages(recs) == ["Missing Title Tag"]

    def test_title_length(self):
        recs = generate_recommendations(_reports(metadata={"title": "Short"}))
        assert _messages(recs) == ["Title length is 5 characters (Recommended: 30-60)"]
        assert recs[0].priority == Priority.MEDIUM
        assert recs[0].impact_score == 5

    def test_missing_description(self):
        recs = generate_recommendations(_reports(metadata={"meta_description": None}))
        assert recs[0].message == "Missing Meta Description"
        assert recs[0].priority == Priority.HIGH
        assert recs[0].impact_score == 8

    def test_h1_rules(self):
        missing = generate_recommendations(_reports(content={"h1_count": 0}))
        assert missing[0].message == "Missing H1 Heading"
        assert missing[0].priority == Priority.HIGH
        multiple = generate_recommendations(_reports(content={"h1_count": 3}))
        assert multiple[0].message == "Multiple H1 Tags Found"
        assert multiple[0].priority == Priority.MEDIUM

    def test_images_missing_alt(self):
        recs = generate_recommendations(_reports(images={"images_without_alt": 1}))
        assert recs[0].message == "1 Images Missing Alt Text"
        assert recs[0].priority == Priority.HIGH
        assert recs[0].impact_score == 5

    def test_low_word_count(self):
        recs = generate_recommendations(_reports(content={"word_count": 120}))
        assert _messages(recs) == ["Low Word Count"]

    def test_slow_load(self):
        recs = generate_recommendations(_reports(performance={"load_time_seconds": 3.2}))
        assert recs[0].message == "Slow Page Load: 3.2s"
        assert recs[0].impact_score == 8

    def test_unmeasured_load_time_is_silent(self):
        recs = generate_recommendations(_reports(performance={"load_time_seconds": None}))
        assert recs == []

    def test_high_request_count(self):
        recs = generate_recommendations(_reports(performance={"total_resources_count": 51}))
        assert recs[0].message == "High Request Count: 51"

    def test_not_https(self):
        recs = generate_recommendations(_reports(security={"is_https": False}))
        assert recs[0].message == "Not Using HTTPS"
        assert recs[0].priority == Priority.CRITICAL
        assert recs[0].category == RecommendationCategory.SECURITY

    def test_links_missing_anchor(self):
        recs = generate_recommendations(_reports(links={"links_without_anchor_text": 4}))
        assert recs[0].message == "4 Links Missing Anchor Text"
        assert recs[0].impact_score == 3

    def test_missing_canonical(self):
        recs = generate_recommendations(_reports(technical={"canonical_present": False}))
        assert recs[0].message == "Missing Canonical Tag"
        assert recs[0].category == RecommendationCategory.CRAWLABILITY

    def test_noindex(self):
        recs = generate_recommendations(_reports(metadata={"meta_noindex": True}))
        assert recs[0].message == "Page is NoIndexed"
        assert recs[0].priority == Priority.HIGH
        assert recs[0].impact_score == 10

    def test_missing_viewport(self):
        recs = generate_recommendations(_reports(metadata={"viewport": None}))
        assert recs[0].category == RecommendationCategory.MOBILE
        assert recs[0].priority == Priority.HIGH

    def test_invalid_json_ld(self):
        recs = generate_recommendations(_reports(structured_data={"invalid_json_ld_count": 2}))
        assert recs[0].category == RecommendationCategory.ADVANCED
        assert recs[0].impact_score == 4

    def test_deprecated_markup(self):
        recs = generate_recommendations(
            _reports(deprecated_markup={"deprecated_tags": ["center"], "has_flash": True})
        )
        assert recs[0].message == "Deprecated Markup Found: <center>, Flash"

    def test_security_headers_only_when_supplied(self):
        recs = generate_recommendations(_reports(security={
            "has_hsts": False,
            "has_x_content_type_options": True,
            "has_x_frame_options": False,
        }))
        assert _messages(recs) == ["Missing Security Headers: Strict-Transport-Security, X-Frame-Options"]
        assert recs[0].priority == Priority.LOW

    def test_empty_reports_fire_missing_rules_without_error(self):
        recs = generate_recommendations({})
        messages = _messages(recs)
        assert "Missing Title Tag" in messages
        assert "Not Using HTTPS" in messages


class TestOrdering:
    """Tests for recommendation ordering."""

    def test_priority_then_impact(self):
        recs = generate_recommendations(_reports(
            metadata={"title": None, "meta_description": None},
            content={"h1_count": 0, "word_count": 10},
            links={"links_without_anchor_text": 2},
            security={"is_https": False},
        ))
        keys = [(rec.priority.value, rec.impact_score) for rec in recs]
        assert keys == sorted(keys, reverse=True)
        assert recs[0].priority == Priority.CRITICAL
        assert recs[-1].message == "2 Links Missing Anchor Text"

    def test_ties_keep_rule_order(self):
        first = Recommendation(RecommendationCategory.CONTENT, Priority.HIGH, "first", "", 5)
        second = Recommendation(RecommendationCategory.LINKS, Priority.HIGH, "second", "", 5)
        assert sort_recommendations([first, second]) == [first, second]

    def test_to_dict(self):
        rec = Recommendation(RecommendationCategory.META_TAGS, Priority.CRITICAL, "m", "a", 10)
        assert rec.to_dict() == {
            "category": "MetaTags",
            "priority": "Critical",
            "message": "m",
            "actionable_advice": "a",
            "impact_score": 10,
        }
