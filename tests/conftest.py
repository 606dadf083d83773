"""Shared test fixtures and configuration."""
from __future__ import annotations

import pytest

# 45 characters
GOOD_TITLE = "A Practical Guide to On-Page SEO Audits, 2024"
GOOD_DESCRIPTION = (
    "Learn how to audit titles, meta descriptions, headings, links and images "
    "so that every page on your site is ready for search."
)
GOOD_H1 = "How to Run a Complete On-Page SEO Audit"

_SENTENCES = [
    "Search engines read the title first, so write one that describes the page clearly.",
    "A short meta description gives people a reason to click on your result.",
    "Every page deserves a single main heading that matches what visitors expect to find.",
    "Images load faster when they use modern formats and declare their width and height.",
    "Descriptive link text helps readers and crawlers understand where a link will lead.",
    "Canonical tags tell crawlers which address should be treated as the original copy.",
    "Structured data lets search results show ratings, prices and other rich details.",
    "Good pages answer one question well instead of covering many topics badly.",
    "Mobile visitors need a viewport tag so the layout fits on smaller screens.",
    "Slow pages lose readers, so trim scripts and combine style sheets where possible.",
    "Secure connections protect visitors and are expected by every modern browser.",
    "Review your pages often because small template changes can undo careful work.",
]


def _paragraphs(count: int) -> str:
    blocks = []
    for i in range(count):
        chunk = " ".join(_SENTENCES[(i * 3 + j) % len(_SENTENCES)] for j in range(4))
        blocks.append(f"<p>{chunk}</p>")
    return "\n    ".join(blocks)


@pytest.fixture
def mock_url() -> str:
    """Return a mock URL for testing."""
    return "https://example.com/test-page"


@pytest.fixture
def good_html() -> str:
    """Return a well-optimized page that should score highly."""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{GOOD_TITLE}</title>
    <meta name="description" content="{GOOD_DESCRIPTION}">
    <meta name="robots" content="index, follow">
    <meta name="author" content="Jane Doe">
    <meta property="article:published_time" content="2024-01-15T10:00:00Z">
    <meta property="og:title" content="On-Page SEO Audits">
    <meta property="og:description" content="A practical audit guide.">
    <meta property="og:type" content="article">
    <meta property="og:image" content="https://example.com/cover.webp">
    <meta name="twitter:card" content="summary_large_image">
    <meta property="fb:app_id" content="1234567890">
    <link rel="canonical" href="https://example.com/test-page">
    <link rel="icon" href="/favicon.ico">
    <link rel="preconnect" href="https://cdn.example.com">
    <link rel="alternate" type="application/rss+xml" href="/feed.xml">
    <link rel="alternate" hreflang="en" href="https://example.com/test-page">
    <link rel="alternate" hreflang="x-default" href="https://example.com/test-page">
    <link rel="stylesheet" href="/styles.css">
    <script type="application/ld+json">
    {{"@context": "https://schema.org", "@type": "Article", "headline": "On-Page SEO Audits",
      "author": {{"@type": "Person", "name": "Jane Doe"}}, "datePublished": "2024-01-15"}}
    </script>
</head>
<body>
    <a href="#main" class="skip">Skip to content</a>
    <nav><a href="/">Home</a> <a href="/guides">Guides</a></nav>
    <main id="main">
    <h1>{GOOD_H1}</h1>
    {_paragraphs(4)}
    <h2>Checklist</h2>
    <ul>
        <li>Titles</li>
        <li>Headings</li>
    </ul>
    {_paragraphs(3)}
    <picture>
        <source type="image/avif" srcset="/images/audit-flow.avif">
        <img src="/images/audit-flow.webp" alt="Audit workflow diagram" width="800" height="450" loading="lazy">
    </picture>
    <h2>Further reading</h2>
    <p>Read the <a href="/guides/technical-seo">technical SEO guide</a> and the
    <a href="https://developers.google.com/search">search documentation</a> for more detail.</p>
    </main>
    <footer><p>Example Inc.</p></footer>
</body>
</html>"""


@pytest.fixture
def empty_body_html() -> str:
    """Return a page with nothing in it."""
    return "<html><head></head><body></body></html>"


@pytest.fixture
def minimal_html() -> str:
    """Return minimal HTML for edge case testing."""
    return """<!DOCTYPE html>
<html>
<head><title>Minimal</title></head>
<body><p>Content</p></body>
</html>"""


@pytest.fixture
def html_multiple_h1() -> str:
    """Return HTML with multiple H1 tags."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>Multiple H1 Test</title>
    <meta name="description" content="Testing multiple H1 tags">
</head>
<body>
    <h1>First H1</h1>
    <p>Content</p>
    <h1>Second H1</h1>
    <p>More content</p>
</body>
</html>"""


@pytest.fixture
def html_noindex() -> str:
    """Return HTML with noindex directive."""
    return """<!DOCTYPE html>
<html>
<head>
    <title>Noindex Page</title>
    <meta name="robots" content="noindex, nofollow">
</head>
<body>
    <h1>Hidden Page</h1>
    <p>This page should not be indexed.</p>
</body>
</html>"""
