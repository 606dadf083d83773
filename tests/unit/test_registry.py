"""Unit tests for the extractor registry."""
from __future__ import annotations

from typing import Any

from seo_auditor.audit.base import BaseExtractor, Category, CategoryReport, Status
from seo_auditor.audit.metadata import MetadataExtractor
from seo_auditor.audit.registry import ExtractorRegistry, default_registry
from seo_auditor.parser.document import parse_document


class _StubMetadata(BaseExtractor):
    @property
    def category(self) -> Category:
        return Category.METADATA

    def extract(self, doc, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()
        report.add("stub", context.get("marker"), Status.GOOD)
        return report


def test_default_registry_covers_every_category():
    registry = default_registry()
    assert set(registry.list_categories()) == set(Category)
    assert registry.list_categories()[0] == Category.METADATA


def test_register_replaces_same_category():
    registry = ExtractorRegistry()
    registry.register(MetadataExtractor())
    registry.register(_StubMetadata())
    assert len(registry.list_all()) == 1
    assert isinstance(registry.get(Category.METADATA), _StubMetadata)


def test_unregister():
    registry = default_registry()
    registry.unregister(Category.MEDIA)
    assert registry.get(Category.MEDIA) is None
    # Unknown categories are ignored
    registry.unregister(Category.MEDIA)


def test_run_passes_context():
    registry = ExtractorRegistry()
    registry.register(_StubMetadata())
    doc = parse_document("<p>x</p>")
    report = registry.run(Category.METADATA, doc, "https://example.com/", marker=42)
    assert report.signal("stub").value == 42
    assert registry.run(Category.IMAGES, doc, "https://example.com/") is None


def test_run_all_keys_by_category():
    registry = ExtractorRegistry()
    registry.register(_StubMetadata())
    reports = registry.run_all(parse_document(""), "https://example.com/")
    assert list(reports) == [Category.METADATA]
    assert reports[Category.METADATA].category == Category.METADATA
