"""Technical SEO, link, performance and security extractors."""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from seo_auditor.audit.base import BaseExtractor, Category, CategoryReport, Status
from seo_auditor.config.settings import settings
from seo_auditor.parser.document import attr_str, attr_tokens, find_links, node_text

_BROKEN_HREF = re.compile(r"(?:^|/)(?:undefined|null)(?:[/?#]|$)", re.IGNORECASE)
_FEED_TYPES = ("application/rss+xml", "application/atom+xml")
SECURITY_HEADERS = ("Strict-Transport-Security", "X-Content-Type-Options", "X-Frame-Options")


def canonical_matches(url: str, canonical: str) -> bool:
    """True when the page URL contains the canonical value, ignoring a trailing slash."""
    target = canonical.strip().rstrip("/")
    page = url.strip().rstrip("/")
    if not target:
        return urlparse(url).path in ("", "/")
    return target in page


def is_internal_link(href: str, url: str) -> bool:
    if href.startswith("/"):
        return True
    if url and href.startswith(url):
        return True
    return not href.startswith("http")


class TechnicalExtractor(BaseExtractor):
    """Canonical, hreflang, favicon, resource hints, feeds and URL shape."""

    @property
    def category(self) -> Category:
        return Category.TECHNICAL

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        canonical_tags = find_links(doc, "canonical")
        canonical = attr_str(canonical_tags[0], "href").strip() if canonical_tags else ""
        is_canonical_correct = bool(canonical) and canonical_matches(url, canonical)
        if not canonical:
            report.add("canonical", None, Status.CRITICAL, "Missing")
        elif is_canonical_correct:
            report.add("canonical", canonical, Status.GOOD)
        else:
            report.add("canonical", canonical, Status.WARNING, "Mismatch")

        hreflangs = [link for link in find_links(doc, "alternate") if link.get("hreflang")]
        has_x_default = any(attr_str(link, "hreflang").lower() == "x-default" for link in hreflangs)
        if hreflangs:
            report.add("hreflang", len(hreflangs), Status.GOOD)
        else:
            report.add("hreflang", 0, Status.INFO, "None")

        favicons = [
            link for link in doc.find_all("link")
            if any("icon" in token for token in attr_tokens(link, "rel"))
        ]
        favicon = attr_str(favicons[0], "href").strip() if favicons else None
        if favicon is None:
            report.add("favicon", None, Status.WARNING, "Missing")
        else:
            report.add("favicon", favicon, Status.GOOD)

        preconnects = find_links(doc, "preconnect")
        if preconnects:
            report.add("preconnect", len(preconnects), Status.GOOD)
        else:
            report.add("preconnect", 0, Status.INFO, "None")

        feeds = [
            link for link in find_links(doc, "alternate")
            if attr_str(link, "type").strip().lower() in _FEED_TYPES
        ]
        if feeds:
            report.add("rss", attr_str(feeds[0], "href"), Status.GOOD)
        else:
            report.add("rss", None, Status.WARNING, "Missing")

        url_length = len(url)
        if url_length < settings.seo.max_url_length:
            report.add("url_length", url_length, Status.GOOD)
        else:
            report.add("url_length", url_length, Status.WARNING, "Too Long")

        amp = find_links(doc, "amphtml")
        if amp:
            report.add("amp", attr_str(amp[0], "href"), Status.GOOD)
        else:
            report.add("amp", None, Status.INFO, "None")

        report.facts.update({
            "canonical": canonical or None,
            "canonical_present": bool(canonical),
            "is_canonical_correct": is_canonical_correct,
            "hreflang_count": len(hreflangs),
            "has_x_default": has_x_default,
            "favicon_url": favicon,
            "preconnect_count": len(preconnects),
            "dns_prefetch_count": len(find_links(doc, "dns-prefetch")),
            "rss_present": bool(feeds),
            "amp_present": bool(amp),
            "url_length": url_length,
        })
        return report


class LinksExtractor(BaseExtractor):
    """Internal/external balance, anchor text, nofollow and broken patterns."""

    @property
    def category(self) -> Category:
        return Category.LINKS

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        internal = external = nofollow = missing_anchor = 0
        broken_urls = []
        anchors = doc.find_all("a", href=True)
        for link in anchors:
            href = attr_str(link, "href").strip()
            if not node_text(link) and link.find("img") is None:
                missing_anchor += 1
            if "nofollow" in attr_tokens(link, "rel"):
                nofollow += 1
            if is_internal_link(href, url):
                internal += 1
            else:
                external += 1
            if not href or _BROKEN_HREF.search(href):
                broken_urls.append(href)

        ratio = round(internal / external, 2) if external else float(internal)

        if not anchors:
            report.add("anchor_text", 0, Status.INFO, "No Links")
            report.add("link_balance", ratio, Status.INFO, "No Links")
            report.add("broken_links", 0, Status.INFO, "No Links")
        else:
            if missing_anchor:
                report.add("anchor_text", missing_anchor, Status.WARNING, f"{missing_anchor} Missing")
            else:
                report.add("anchor_text", 0, Status.GOOD)

            if internal < external:
                report.add("link_balance", ratio, Status.WARNING, "More External Than Internal")
            else:
                report.add("link_balance", ratio, Status.GOOD)

            if broken_urls:
                report.add("broken_links", len(broken_urls), Status.WARNING, "Suspicious Hrefs")
            else:
                report.add("broken_links", 0, Status.GOOD)

        report.add("nofollow", nofollow, Status.INFO, "Counted")

        report.facts.update({
            "total_internal_links": internal,
            "total_external_links": external,
            "internal_to_external_ratio": ratio,
            "nofollow_links": nofollow,
            "links_without_anchor_text": missing_anchor,
            "broken_links_count": len(broken_urls),
            "broken_link_urls": broken_urls,
        })
        return report


def _is_render_blocking_script(script) -> bool:
    if script.get("async") is not None or script.get("defer") is not None:
        return False
    return attr_str(script, "type").strip().lower() != "module"


class PerformanceExtractor(BaseExtractor):
    """Resource counts, render-blocking assets, page weight and load time."""

    @property
    def category(self) -> Category:
        return Category.PERFORMANCE

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()
        perf = settings.performance

        css_count = len(find_links(doc, "stylesheet"))
        js_count = len(doc.find_all("script", src=True))
        image_count = len(doc.find_all("img"))
        total = css_count + js_count + image_count
        if total > perf.max_resources:
            report.add("resource_count", total, Status.WARNING, "Too Many Requests")
        else:
            report.add("resource_count", total, Status.GOOD)

        render_blocking = 0
        if doc.head is not None:
            render_blocking += sum(
                1 for script in doc.head.find_all("script", src=True)
                if _is_render_blocking_script(script)
            )
            render_blocking += len(find_links(doc.head, "stylesheet"))
        if render_blocking > perf.max_render_blocking:
            report.add("render_blocking", render_blocking, Status.WARNING, "Too Many")
        else:
            report.add("render_blocking", render_blocking, Status.GOOD)

        html = context.get("html")
        if html is None:
            html = str(doc)
        page_size_kb = len(html.encode("utf-8")) // 1024
        if page_size_kb < perf.page_size_good_kb:
            report.add("page_size", page_size_kb, Status.GOOD)
        elif page_size_kb < perf.page_size_warning_kb:
            report.add("page_size", page_size_kb, Status.WARNING, "Large")
        else:
            report.add("page_size", page_size_kb, Status.CRITICAL, "Too Large")

        load_time = context.get("load_time_seconds")
        if load_time is None:
            report.add("load_time", None, Status.UNKNOWN, "Not Measured")
        elif load_time <= perf.load_time_good:
            report.add("load_time", load_time, Status.GOOD)
        elif load_time <= perf.load_time_warning:
            report.add("load_time", load_time, Status.WARNING, "Slow")
        else:
            report.add("load_time", load_time, Status.CRITICAL, "Very Slow")

        report.facts.update({
            "css_files_count": css_count,
            "js_files_count": js_count,
            "total_resources_count": total,
            "render_blocking_resources": render_blocking,
            "estimated_page_size_kb": page_size_kb,
            "load_time_seconds": load_time,
        })
        return report


def _header_flags(headers: Mapping[str, str] | None) -> dict[str, bool | None]:
    """Presence of each security header; None when no headers were supplied."""
    if headers is None:
        return {name: None for name in SECURITY_HEADERS}
    present = {key.lower() for key in headers}
    return {name: name.lower() in present for name in SECURITY_HEADERS}


def _mixed_content(doc: BeautifulSoup) -> list[str]:
    urls = []
    for tag in doc.find_all(["img", "script", "iframe", "video", "audio", "source", "embed"], src=True):
        src = attr_str(tag, "src").strip()
        if src.lower().startswith("http://"):
            urls.append(src)
    for link in find_links(doc, "stylesheet"):
        href = attr_str(link, "href").strip()
        if href.lower().startswith("http://"):
            urls.append(href)
    return urls


class SecurityExtractor(BaseExtractor):
    """HTTPS, mixed content and security header presence."""

    @property
    def category(self) -> Category:
        return Category.SECURITY

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        is_https = urlparse(url).scheme.lower() == "https"
        if is_https:
            report.add("https", True, Status.GOOD)
        else:
            report.add("https", False, Status.CRITICAL, "Not Secure")

        mixed = _mixed_content(doc) if is_https else []
        if not is_https:
            report.add("mixed_content", 0, Status.INFO, "Not HTTPS")
        elif mixed:
            report.add("mixed_content", len(mixed), Status.WARNING, "Insecure Resources")
        else:
            report.add("mixed_content", 0, Status.GOOD)

        flags = _header_flags(context.get("headers"))
        report.facts.update({
            "is_https": is_https,
            # HTTPS reachability stands in for certificate validation
            "ssl_certificate_valid": is_https,
            "mixed_content_urls": mixed,
            "has_hsts": flags["Strict-Transport-Security"],
            "has_x_content_type_options": flags["X-Content-Type-Options"],
            "has_x_frame_options": flags["X-Frame-Options"],
        })
        return report
