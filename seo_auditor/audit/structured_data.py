"""Structured data (JSON-LD and microdata) extractor."""
from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from bs4 import BeautifulSoup

from seo_auditor.audit.base import BaseExtractor, Category, CategoryReport, Status
from seo_auditor.parser.document import attr_str

INVALID_JSON_LD = "Invalid JSON-LD"

# Details map key -> substring looked for in @type values
SCHEMA_DETAIL_KEYS = {
    "Breadcrumb": "breadcrumb",
    "Article": "article",
    "Product": "product",
    "Organization": "organization",
    "LocalBusiness": "localbusiness",
    "Video": "video",
    "FAQ": "faq",
}


def load_json_ld(doc: BeautifulSoup) -> list[Any]:
    """Parse every JSON-LD script independently.

    Returns one entry per script: the decoded JSON, or None when the script
    body is not valid JSON.
    """
    blocks = []
    for script in doc.find_all("script"):
        if attr_str(script, "type").strip().lower() != "application/ld+json":
            continue
        raw = script.string if script.string is not None else script.get_text()
        # JSONDecodeError is a ValueError, as are oversized integer literals
        try:
            blocks.append(json.loads(raw))
        except (ValueError, RecursionError, TypeError):
            blocks.append(None)
    return blocks


def iter_json_ld_nodes(data: Any) -> Iterator[dict]:
    """Yield every JSON object in a JSON-LD document, depth first."""
    stack = [data]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            yield current
            stack.extend(reversed(list(current.values())))
        elif isinstance(current, list):
            stack.extend(reversed(current))


def find_json_ld_value(blocks: list[Any], key: str) -> Any:
    """Return the first value stored under key in any JSON-LD block."""
    for block in blocks:
        if block is None:
            continue
        for node in iter_json_ld_nodes(block):
            if key in node and node[key]:
                return node[key]
    return None


def _schema_types(data: Any) -> list[str]:
    """Collect @type values, including @graph members and nested items."""
    types: list[str] = []
    for node in iter_json_ld_nodes(data):
        value = node.get("@type")
        if isinstance(value, str):
            types.append(value)
        elif isinstance(value, list):
            types.extend(item for item in value if isinstance(item, str))
    return types


class StructuredDataExtractor(BaseExtractor):
    """JSON-LD types, schema details and microdata presence."""

    @property
    def category(self) -> Category:
        return Category.STRUCTURED_DATA

    def extract(self, doc: BeautifulSoup, url: str, **context: Any) -> CategoryReport:
        report = self.new_report()

        types: list[str] = []
        invalid_count = 0
        blocks = load_json_ld(doc)
        for block in blocks:
            if block is None:
                invalid_count += 1
                types.append(INVALID_JSON_LD)
                continue
            for schema_type in _schema_types(block):
                if schema_type not in types:
                    types.append(schema_type)

        has_microdata = doc.find(attrs={"itemtype": True}) is not None
        if has_microdata:
            types.append("Microdata")

        details: dict[str, str] = {}
        for key, needle in SCHEMA_DETAIL_KEYS.items():
            for schema_type in types:
                if schema_type == INVALID_JSON_LD:
                    continue
                if needle in schema_type.lower():
                    details[key] = schema_type
                    break

        if not blocks and not has_microdata:
            report.add("structured_data", types, Status.WARNING, "Missing")
        elif invalid_count:
            report.add("structured_data", types, Status.WARNING, INVALID_JSON_LD)
        else:
            report.add("structured_data", types, Status.GOOD)

        report.facts.update({
            "types": types,
            "details": details,
            "json_ld_count": len(blocks),
            "invalid_json_ld_count": invalid_count,
            "has_microdata": has_microdata,
        })
        return report
