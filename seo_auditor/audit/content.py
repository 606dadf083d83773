"""Content structure, image and content quality extractors."""
from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from seo_auditor.audit.base import BaseExtractor, Category, CategoryReport, Status
from seo_auditor.audit.structured_data import find_json_ld_value, load_json_ld
from seo_auditor.config.settings import settings
from seo_auditor.parser.document import (
    EXCLUDED_TAGS,
    attr_str,
    attr_tokens,
    body_or_root,
    find_links,
    has_ancestor,
    meta_content,
    node_text,
    visible_text,
)
from seo_auditor.parser.readability import TextAnalysis, analyze_document

_HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
_GENERIC_FILENAME = re.compile(r"img\d+", re.IGNORECASE)
_MODERN_FORMATS = (".webp", ".avif")
_MODERN_MIME_TYPES = ("image/webp", "image/avif")


def _text_analysis(doc: BeautifulSoup, context: dict) -> TextAnalysis:
    analysis = context.get("text_analysis")
    if analysis is None:
        analysis = analyze_document(doc)
    return analysis


def _heading_issues(doc: BeautifulSoup) -> list[str]:
    """Report headings that go more than one level deeper than the previous one."""
    issues = []
    previous = None
    for heading in doc.find_all(_HEADING_TAGS):
        level = int(heading.name[1])
        if previous is not None and level > previous + 1:
            issues.append(f"H{previous} followed by H{level}")
        previous = level
    return issues


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(min(part / whole * 100, 100.0), 2)


class ContentExtractor(BaseExtractor):
    """Headings, list structure, word count and text ratios."""

    @property
    def category(self) -> Category:
        return Category.CONTENT

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()
        analysis = _text_analysis(doc, context)
        html = context.get("html")
        html_length = len(html) if html is not None else len(str(doc))

        h1_tags = [node_text(tag) for tag in doc.find_all("h1")]
        seo = settings.seo
        if not h1_tags:
            report.add("h1", h1_tags, Status.CRITICAL, "Missing")
        elif len(h1_tags) > 1:
            report.add("h1", h1_tags, Status.CRITICAL, "Multiple")
        elif not seo.h1_min_length <= len(h1_tags[0]) <= seo.h1_max_length:
            report.add("h1", h1_tags, Status.WARNING, "Length")
        else:
            report.add("h1", h1_tags, Status.GOOD)

        issues = _heading_issues(doc)
        if issues:
            report.add("heading_structure", issues, Status.WARNING, "Skipped Levels")
        else:
            report.add("heading_structure", issues, Status.GOOD)

        orphans = [li for li in doc.find_all("li") if li.parent is None or li.parent.name not in ("ul", "ol")]
        if orphans:
            report.add("list_items", len(orphans), Status.WARNING, "Orphan List Items")
        else:
            report.add("list_items", 0, Status.GOOD)

        content = settings.content
        if analysis.word_count < content.min_content_words:
            report.add("word_count", analysis.word_count, Status.WARNING, "Thin Content")
        else:
            report.add("word_count", analysis.word_count, Status.GOOD)

        text = visible_text(body_or_root(doc))
        text_ratio = _percent(len(text), html_length)
        if text_ratio < content.min_text_to_html_ratio:
            report.add("text_to_html_ratio", text_ratio, Status.WARNING, "Low")
        else:
            report.add("text_to_html_ratio", text_ratio, Status.GOOD)

        paragraphs = [
            node_text(p) for p in doc.find_all("p")
            if not has_ancestor(p, EXCLUDED_TAGS)
        ]
        paragraphs = [p for p in paragraphs if p]
        paragraph_share = _percent(sum(len(p) for p in paragraphs), len(text))
        if paragraph_share < content.min_paragraph_share:
            report.add("paragraph_share", paragraph_share, Status.WARNING, "Low")
        else:
            report.add("paragraph_share", paragraph_share, Status.GOOD)

        report.facts.update({
            "h1_tags": h1_tags,
            "h1_count": len(h1_tags),
            "h2_tags": [t for t in (node_text(tag) for tag in doc.find_all("h2")) if t],
            "h3_tags": [t for t in (node_text(tag) for tag in doc.find_all("h3")) if t],
            "heading_issues": issues,
            "orphan_list_items": len(orphans),
            "word_count": analysis.word_count,
            "paragraph_count": len(paragraphs),
            "text_to_html_ratio": text_ratio,
            "paragraph_share": paragraph_share,
        })
        return report


def _filename(src: str) -> str:
    try:
        path = urlparse(src).path
    except ValueError:
        # Unparseable URLs such as an unclosed IPv6 host
        path = src.split("?", 1)[0].split("#", 1)[0]
    return path.rsplit("/", 1)[-1]


def _uses_modern_format(img) -> bool:
    sources = f"{attr_str(img, 'src')} {attr_str(img, 'srcset')}".lower()
    if any(ext in sources for ext in _MODERN_FORMATS):
        return True
    picture = img.find_parent("picture")
    if picture is None:
        return False
    for source in picture.find_all("source"):
        if attr_str(source, "type").strip().lower() in _MODERN_MIME_TYPES:
            return True
        if any(ext in attr_str(source, "srcset").lower() for ext in _MODERN_FORMATS):
            return True
    return False


class ImagesExtractor(BaseExtractor):
    """Alt text, dimensions, filenames, lazy loading and image formats."""

    @property
    def category(self) -> Category:
        return Category.IMAGES

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()
        images = doc.find_all("img")

        without_alt = [img for img in images if not attr_str(img, "alt").strip()]
        without_alt_urls = [attr_str(img, "src") or "unknown" for img in without_alt]
        missing_dimensions = [img for img in images if not img.get("width") or not img.get("height")]
        generic_names = []
        for img in images:
            src = attr_str(img, "src").strip()
            if not src or src.startswith("data:"):
                continue
            name = _filename(src)
            if _GENERIC_FILENAME.search(name) or "_" in name:
                generic_names.append(src)
        lazy = [img for img in images if attr_str(img, "loading").strip().lower() == "lazy"]
        modern = [img for img in images if _uses_modern_format(img)]
        responsive = [img for img in images if img.get("srcset") or has_ancestor(img, ["picture"])]

        report.facts.update({
            "image_count": len(images),
            "images_without_alt": len(without_alt),
            "images_without_alt_urls": without_alt_urls,
            "images_missing_dimensions": len(missing_dimensions),
            "images_with_generic_names": len(generic_names),
            "images_lazy_loaded": len(lazy),
            "images_modern_format": len(modern),
            "images_responsive": len(responsive),
        })

        if not images:
            for name in ("alt_text", "dimensions", "filenames", "lazy_loading", "modern_format", "responsive"):
                report.add(name, 0, Status.INFO, "No Images")
            return report

        if without_alt:
            report.add("alt_text", len(without_alt), Status.WARNING, f"{len(without_alt)} Missing")
        else:
            report.add("alt_text", 0, Status.GOOD)

        if missing_dimensions:
            report.add("dimensions", len(missing_dimensions), Status.CRITICAL, "Missing Width/Height")
        else:
            report.add("dimensions", 0, Status.GOOD)

        if generic_names:
            report.add("filenames", len(generic_names), Status.WARNING, "Generic Names")
        else:
            report.add("filenames", 0, Status.GOOD)

        for name, found in (("lazy_loading", lazy), ("modern_format", modern), ("responsive", responsive)):
            if found:
                report.add(name, len(found), Status.GOOD)
            else:
                report.add(name, 0, Status.WARNING, "Not Used")

        return report


def _find_author(doc: BeautifulSoup, json_ld: list) -> str | None:
    author = meta_content(doc, "author")
    if author:
        return author
    for tag in find_links(doc, "author") + doc.find_all("a"):
        if "author" in attr_tokens(tag, "rel"):
            return node_text(tag) or attr_str(tag, "href") or None
    value = find_json_ld_value(json_ld, "author")
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("name")
    return str(value) if value else None


def _find_published_date(doc: BeautifulSoup, json_ld: list) -> str | None:
    for key in ("article:published_time", "date", "pubdate"):
        value = meta_content(doc, key)
        if value:
            return value
    time_tag = doc.find("time", attrs={"datetime": True})
    if time_tag is not None:
        return attr_str(time_tag, "datetime").strip() or None
    value = find_json_ld_value(json_ld, "datePublished")
    return str(value) if value else None


def _find_modified_date(doc: BeautifulSoup, json_ld: list) -> str | None:
    value = meta_content(doc, "article:modified_time")
    if value:
        return value
    value = find_json_ld_value(json_ld, "dateModified")
    return str(value) if value else None


class ContentQualityExtractor(BaseExtractor):
    """Readability, keyword density and authorship signals."""

    @property
    def category(self) -> Category:
        return Category.CONTENT_QUALITY

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()
        analysis = _text_analysis(doc, context)
        content = settings.content
        json_ld = load_json_ld(doc)

        ease = analysis.reading_ease
        if analysis.word_count == 0:
            report.add("reading_ease", ease, Status.INFO, "No Text")
        elif ease >= content.reading_ease_good:
            report.add("reading_ease", ease, Status.GOOD)
        elif ease >= content.reading_ease_fair:
            report.add("reading_ease", ease, Status.WARNING, "Difficult")
        else:
            report.add("reading_ease", ease, Status.CRITICAL, "Very Difficult")

        density = analysis.keyword_density
        top_density = max(density.values()) if density else 0.0
        if not density:
            report.add("keyword_density", top_density, Status.INFO, "No Keywords")
        elif top_density > content.keyword_stuffing_density:
            report.add("keyword_density", top_density, Status.WARNING, "Possible Stuffing")
        else:
            report.add("keyword_density", top_density, Status.GOOD)

        author = _find_author(doc, json_ld)
        if author:
            report.add("author", author, Status.GOOD)
        else:
            report.add("author", None, Status.WARNING, "Missing")

        published = _find_published_date(doc, json_ld)
        if published:
            report.add("published_date", published, Status.GOOD)
        else:
            report.add("published_date", None, Status.INFO, "Missing")

        report.facts.update({
            "keyword_density": density,
            "reading_ease": ease,
            "reading_ease_mode": "syllables" if analysis.syllables_estimated else "approximate",
            "sentence_count": analysis.sentence_count,
            "average_sentence_length": analysis.average_sentence_length,
            "author": author,
            "published_date": published,
            "modified_date": _find_modified_date(doc, json_ld),
        })
        return report
