"""Media, form, deprecated markup and accessibility extractors."""
from __future__ import annotations

from typing import Any

from bs4 import BeautifulSoup

from seo_auditor.audit.base import BaseExtractor, Category, CategoryReport, Status
from seo_auditor.config.settings import settings
from seo_auditor.parser.document import attr_str, body_or_root, node_text

DEPRECATED_TAGS = ["center", "font", "marquee", "blink", "frame", "frameset", "big", "strike", "tt"]
_VIDEO_HOSTS = ("youtube.com", "youtube-nocookie.com", "youtu.be", "player.vimeo.com", "vimeo.com")
_UNLABELED_INPUT_TYPES = {"hidden", "submit", "button", "reset", "image"}
_FLASH_MARKERS = (".swf", "application/x-shockwave-flash")


def _is_video_embed(iframe) -> bool:
    src = attr_str(iframe, "src").lower()
    return any(host in src for host in _VIDEO_HOSTS)


class MediaExtractor(BaseExtractor):
    """Video and audio markup."""

    @property
    def category(self) -> Category:
        return Category.MEDIA

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        videos = doc.find_all("video")
        embeds = [iframe for iframe in doc.find_all("iframe") if _is_video_embed(iframe)]
        video_issues = []
        for video in videos:
            if video.get("poster") is None:
                video_issues.append("Video without poster")
            if video.find("track") is None:
                video_issues.append("Video without captions")
            if video.get("autoplay") is not None and video.get("muted") is None:
                video_issues.append("Autoplay without muted")

        if not videos and not embeds:
            report.add("video", 0, Status.INFO, "No Video")
        elif video_issues:
            report.add("video", len(videos) + len(embeds), Status.WARNING, "Issues Found")
        else:
            report.add("video", len(videos) + len(embeds), Status.GOOD)

        audios = doc.find_all("audio")
        audio_issues = [audio for audio in audios if audio.get("controls") is None]
        if not audios:
            report.add("audio", 0, Status.INFO, "No Audio")
        elif audio_issues:
            report.add("audio", len(audios), Status.WARNING, "Missing Controls")
        else:
            report.add("audio", len(audios), Status.GOOD)

        report.facts.update({
            "video_count": len(videos),
            "video_embed_count": len(embeds),
            "video_issues": video_issues,
            "audio_count": len(audios),
            "audio_without_controls": len(audio_issues),
        })
        return report


def _is_labeled(field, label_targets: set[str]) -> bool:
    if attr_str(field, "aria-label").strip() or attr_str(field, "aria-labelledby").strip():
        return True
    field_id = attr_str(field, "id").strip()
    if field_id and field_id in label_targets:
        return True
    return field.find_parent("label") is not None


class FormsExtractor(BaseExtractor):
    """Form field labelling and form actions."""

    @property
    def category(self) -> Category:
        return Category.FORMS

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        forms = doc.find_all("form")
        label_targets = {
            attr_str(label, "for").strip()
            for label in doc.find_all("label")
            if attr_str(label, "for").strip()
        }

        unlabeled = []
        for field in doc.find_all(["input", "select", "textarea"]):
            if field.name == "input" and attr_str(field, "type").strip().lower() in _UNLABELED_INPUT_TYPES:
                continue
            if not _is_labeled(field, label_targets):
                unlabeled.append(attr_str(field, "name") or attr_str(field, "id") or field.name)

        without_action = [form for form in forms if not attr_str(form, "action").strip()]

        issues = [f"Field without label: {name}" for name in unlabeled]
        issues.extend("Form without action" for _ in without_action)

        if not forms and not unlabeled:
            report.add("forms", 0, Status.INFO, "No Forms")
        elif issues:
            report.add("forms", len(issues), Status.WARNING, "Issues Found")
        else:
            report.add("forms", 0, Status.GOOD)

        report.facts.update({
            "form_count": len(forms),
            "unlabeled_fields": unlabeled,
            "forms_without_action": len(without_action),
            "form_issues": issues,
        })
        return report


def _is_flash(tag) -> bool:
    haystack = " ".join(
        attr_str(tag, name).lower() for name in ("src", "data", "type", "classid")
    )
    return any(marker in haystack for marker in _FLASH_MARKERS) or "clsid:d27cdb6e" in haystack


class DeprecatedMarkupExtractor(BaseExtractor):
    """Obsolete tags, flash, inline styles and DOM size."""

    @property
    def category(self) -> Category:
        return Category.DEPRECATED_MARKUP

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()
        perf = settings.performance

        deprecated = sorted({tag.name for tag in doc.find_all(DEPRECATED_TAGS)})
        flash = [tag for tag in doc.find_all(["embed", "object"]) if _is_flash(tag)]
        inline_styles = len(doc.find_all(style=True))
        dom_nodes = len(doc.find_all(True))

        if deprecated or flash:
            report.add("deprecated_markup", deprecated, Status.CRITICAL, "Obsolete Markup")
        elif inline_styles > perf.max_inline_styles:
            report.add("deprecated_markup", deprecated, Status.WARNING, "Too Many Inline Styles")
        elif dom_nodes > perf.max_dom_nodes:
            report.add("deprecated_markup", deprecated, Status.WARNING, "Large DOM")
        else:
            report.add("deprecated_markup", deprecated, Status.GOOD)

        report.facts.update({
            "deprecated_tags": deprecated,
            "has_flash": bool(flash),
            "inline_style_count": inline_styles,
            "dom_node_count": dom_nodes,
        })
        return report


def _has_landmark(doc: BeautifulSoup, tag_name: str, role: str) -> bool:
    if doc.find(tag_name) is not None:
        return True
    return doc.find(attrs={"role": role}) is not None


def _has_skip_link(doc: BeautifulSoup) -> bool:
    for link in body_or_root(doc).find_all("a", href=True, limit=5):
        if attr_str(link, "href").startswith("#") and "skip" in node_text(link).lower():
            return True
    return False


def _positive_tabindex(doc: BeautifulSoup) -> int:
    count = 0
    for tag in doc.find_all(tabindex=True):
        try:
            if int(attr_str(tag, "tabindex").strip()) > 0:
                count += 1
        except ValueError:
            continue
    return count


class AccessibilityExtractor(BaseExtractor):
    """Landmarks, skip links and tab order."""

    @property
    def category(self) -> Category:
        return Category.ACCESSIBILITY

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        has_main = _has_landmark(doc, "main", "main")
        has_nav = _has_landmark(doc, "nav", "navigation")
        has_footer = _has_landmark(doc, "footer", "contentinfo")
        has_skip_link = _has_skip_link(doc)
        positive_tabindex = _positive_tabindex(doc)

        if not has_main:
            report.add("accessibility", positive_tabindex, Status.WARNING, "Missing Main Landmark")
        elif positive_tabindex:
            report.add("accessibility", positive_tabindex, Status.WARNING, "Positive Tabindex")
        else:
            report.add("accessibility", positive_tabindex, Status.GOOD)

        report.facts.update({
            "has_main_landmark": has_main,
            "has_nav_landmark": has_nav,
            "has_footer_landmark": has_footer,
            "has_skip_link": has_skip_link,
            "positive_tabindex_count": positive_tabindex,
        })
        return report
