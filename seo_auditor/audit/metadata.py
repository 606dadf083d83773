"""Metadata and social markup extractors."""
from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup

from seo_auditor.audit.base import BaseExtractor, Category, CategoryReport, Status
from seo_auditor.config.settings import settings
from seo_auditor.parser.document import attr_str, has_ancestor, has_meta, meta_content, node_text


def _title_status(titles: list, title: str | None) -> tuple[Status, str | None]:
    seo = settings.seo
    if not titles:
        return Status.CRITICAL, "Missing"
    if not title:
        return Status.CRITICAL, "Empty"
    if len(titles) > 1:
        return Status.WARNING, "Multiple"
    if "untitled" in title.lower():
        return Status.WARNING, "Placeholder"
    if len(title) < seo.title_min_length:
        return Status.WARNING, "Too Short"
    if len(title) > seo.title_max_length:
        return Status.WARNING, "Too Long"
    return Status.GOOD, None


def _description_status(description: str | None) -> tuple[Status, str | None]:
    seo = settings.seo
    if description is None:
        return Status.CRITICAL, "Missing"
    if not description:
        return Status.CRITICAL, "Empty"
    if len(description) < seo.description_min_length:
        return Status.WARNING, "Too Short"
    if len(description) > seo.description_max_length:
        return Status.WARNING, "Too Long"
    return Status.GOOD, None


def _find_charset(doc: BeautifulSoup) -> str | None:
    for meta in doc.find_all("meta"):
        charset = attr_str(meta, "charset").strip()
        if charset:
            return charset
        if attr_str(meta, "http-equiv").strip().lower() == "content-type":
            content = attr_str(meta, "content").lower()
            if "charset=" in content:
                return content.split("charset=", 1)[1].split(";")[0].strip() or None
    return None


class MetadataExtractor(BaseExtractor):
    """Title, description, robots, viewport, charset and language."""

    @property
    def category(self) -> Category:
        return Category.METADATA

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        # <title> elements inside inline SVG are not page titles
        titles = [tag for tag in doc.find_all("title") if not has_ancestor(tag, ["svg"])]
        title = node_text(titles[0]) if titles else None
        status, detail = _title_status(titles, title)
        report.add("title", title, status, detail)

        description = meta_content(doc, "description")
        status, detail = _description_status(description)
        report.add("meta_description", description, status, detail)

        robots = meta_content(doc, "robots")
        noindex = bool(robots) and "noindex" in robots.lower()
        if robots is None:
            report.add("meta_robots", None, Status.GOOD, "Default")
        elif noindex:
            report.add("meta_robots", robots, Status.CRITICAL, "Noindex")
        else:
            report.add("meta_robots", robots, Status.GOOD)

        viewport = meta_content(doc, "viewport")
        if viewport is None:
            report.add("viewport", None, Status.CRITICAL, "Missing")
        else:
            report.add("viewport", viewport, Status.GOOD)

        charset = _find_charset(doc)
        if charset is None:
            report.add("charset", None, Status.CRITICAL, "Missing")
        else:
            report.add("charset", charset, Status.GOOD)

        html_tag = doc.find("html")
        lang = attr_str(html_tag, "lang").strip() if html_tag else ""
        if not lang:
            report.add("lang", None, Status.WARNING, "Missing")
        else:
            report.add("lang", lang, Status.GOOD)

        report.facts.update({
            "title": title,
            "title_length": len(title) if title else 0,
            "title_count": len(titles),
            "meta_description": description,
            "meta_description_length": len(description) if description else 0,
            "meta_robots": robots,
            "meta_noindex": noindex,
            "viewport": viewport,
            "charset": charset,
            "lang": lang or None,
            "has_meta_keywords": has_meta(doc, "keywords"),
        })
        return report


# (meta key, signal name, status when absent)
_SOCIAL_TAGS = [
    ("og:title", "og_title", Status.WARNING),
    ("og:description", "og_description", Status.WARNING),
    ("og:type", "og_type", Status.WARNING),
    ("og:image", "og_image", Status.CRITICAL),
    ("twitter:card", "twitter_card", Status.WARNING),
]


class SocialExtractor(BaseExtractor):
    """Open Graph, Twitter card and Facebook markup."""

    @property
    def category(self) -> Category:
        return Category.SOCIAL

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        for key, name, missing_status in _SOCIAL_TAGS:
            value = meta_content(doc, key)
            if value is None:
                report.add(name, None, missing_status, "Missing")
            else:
                report.add(name, value, Status.GOOD)
            report.facts[name] = value

        fb_app_id = meta_content(doc, "fb:app_id")
        publisher = meta_content(doc, "article:publisher")
        facebook = fb_app_id if fb_app_id is not None else publisher
        if facebook is None:
            report.add("facebook", None, Status.INFO, "Missing")
        else:
            report.add("facebook", facebook, Status.GOOD)

        report.facts.update({
            "fb_app_id": fb_app_id,
            "article_publisher": publisher,
        })
        return report
