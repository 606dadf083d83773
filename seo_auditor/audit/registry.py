"""Extractor registry."""
from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup

from seo_auditor.audit.base import BaseExtractor, Category, CategoryReport
from seo_auditor.audit.content import (
    ContentExtractor,
    ContentQualityExtractor,
    ImagesExtractor,
)
from seo_auditor.audit.markup import (
    AccessibilityExtractor,
    DeprecatedMarkupExtractor,
    FormsExtractor,
    MediaExtractor,
)
from seo_auditor.audit.metadata import MetadataExtractor, SocialExtractor
from seo_auditor.audit.structured_data import StructuredDataExtractor
from seo_auditor.audit.technical import (
    LinksExtractor,
    PerformanceExtractor,
    SecurityExtractor,
    TechnicalExtractor,
)


class ExtractorRegistry:
    """Registry for category extractors, one per category.

    Usage:
        registry = ExtractorRegistry()
        registry.register(MetadataExtractor())
        reports = registry.run_all(doc, url)
    """

    def __init__(self):
        self._extractors: dict[Category, BaseExtractor] = {}

    def register(self, extractor: BaseExtractor) -> None:
        """Register an extractor, replacing any previous one for its category."""
        self._extractors[extractor.category] = extractor

    def unregister(self, category: Category) -> None:
        self._extractors.pop(category, None)

    def get(self, category: Category) -> BaseExtractor | None:
        return self._extractors.get(category)

    def list_all(self) -> list[BaseExtractor]:
        return list(self._extractors.values())

    def list_categories(self) -> list[Category]:
        return list(self._extractors.keys())

    def run(
        self,
        category: Category,
        doc: BeautifulSoup,
        url: str,
        **context: Any
    ) -> CategoryReport | None:
        """Run the extractor for one category.

        Returns:
            CategoryReport or None if no extractor is registered
        """
        extractor = self._extractors.get(category)
        if extractor is None:
            return None
        return extractor.extract(doc, url, **context)

    def run_all(
        self,
        doc: BeautifulSoup,
        url: str,
        **context: Any
    ) -> dict[Category, CategoryReport]:
        """Run every registered extractor in registration order."""
        return {
            category: extractor.extract(doc, url, **context)
            for category, extractor in self._extractors.items()
        }


def default_registry() -> ExtractorRegistry:
    """Build a registry holding every built-in extractor."""
    registry = ExtractorRegistry()
    for extractor in (
        MetadataExtractor(),
        ContentExtractor(),
        ImagesExtractor(),
        SocialExtractor(),
        TechnicalExtractor(),
        LinksExtractor(),
        PerformanceExtractor(),
        SecurityExtractor(),
        MediaExtractor(),
        FormsExtractor(),
        DeprecatedMarkupExtractor(),
        AccessibilityExtractor(),
        ContentQualityExtractor(),
        StructuredDataExtractor(),
    ):
        registry.register(extractor)
    return registry
