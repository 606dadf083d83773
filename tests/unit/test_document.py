"""Unit tests for the parsed document adapter."""
from __future__ import annotations

from seo_auditor.parser.document import (
    attr_str,
    find_links,
    find_meta,
    has_meta,
    iter_visible_strings,
    meta_content,
    node_text,
    parse_document,
    visible_text,
)


class TestParseDocument:
    """Tests for parse_document."""

    def test_empty_input_yields_empty_tree(self):
        doc = parse_document("")
        assert doc.find("title") is None
        assert visible_text(doc) == ""

    def test_none_input_yields_empty_tree(self):
        doc = parse_document(None)
        assert doc.find("body") is None

    def test_malformed_markup_does_not_raise(self):
        doc = parse_document("<html><head><title>Broken<body><p>unclosed <b>bold</p></div>")
        assert doc.find("p") is not None


class TestVisibleText:
    """Tests for the non-destructive text traversal."""

    def test_skips_excluded_subtrees(self):
        doc = parse_document(
            "<body><p>Hello</p><script>var x = 1;</script><style>p {}</style>"
            "<noscript>Enable JS</noscript><template><p>tpl</p></template>"
            "<svg><text>chart</text></svg><p>world</p></body>"
        )
        assert visible_text(doc.body) == "Hello world"

    def test_does_not_mutate_tree(self):
        doc = parse_document("<body><p>Text</p><script>track()</script></body>")
        visible_text(doc.body)
        assert doc.find("script") is not None
        assert doc.find("script").get_text() == "track()"

    def test_inline_markup_does_not_split_words(self):
        doc = parse_document("<body><p>Un<em>believ</em>able H<sub>2</sub>O</p></body>")
        assert visible_text(doc.body) == "Unbelievable H2O"

    def test_block_boundaries_separate_words(self):
        doc = parse_document(
            "<body><div>One</div><div>Two</div><ul><li>Three</li><li>Four</li></ul>"
            "<p>Five<br>Six</p><table><tr><td>Seven</td><td>Eight</td></tr></table></body>"
        )
        assert visible_text(doc.body) == "One Two Three Four Five Six Seven Eight"

    def test_collapses_whitespace_and_decodes_entities(self):
        doc = parse_document("<body><p>  Fish &amp;\n\n  chips  </p></body>")
        assert visible_text(doc.body) == "Fish & chips"

    def test_skips_comments(self):
        doc = parse_document("<body><p>Shown</p><!-- hidden --></body>")
        assert visible_text(doc.body) == "Shown"

    def test_custom_exclusions(self):
        doc = parse_document("<body><nav>Menu</nav><p>Body</p></body>")
        strings = list(iter_visible_strings(doc.body, exclude=["nav"]))
        assert "Menu" not in " ".join(strings)

    def test_node_text_of_excluded_root_is_kept(self):
        doc = parse_document("<body><noscript>Fallback text</noscript></body>")
        assert node_text(doc.find("noscript")) == "Fallback text"


class TestMetaLookup:
    """Tests for meta tag helpers."""

    def test_find_by_name_case_insensitive(self):
        doc = parse_document('<head><meta NAME="Description" content="Hi"></head>')
        assert find_meta(doc, "description") is not None
        assert meta_content(doc, "description") == "Hi"

    def test_find_by_property(self):
        doc = parse_document('<head><meta property="og:title" content=" Title "></head>')
        assert meta_content(doc, "og:title") == "Title"

    def test_absent_meta_is_none(self):
        doc = parse_document("<head></head>")
        assert meta_content(doc, "description") is None
        assert has_meta(doc, "description") is False

    def test_present_but_empty_content(self):
        doc = parse_document('<head><meta name="description" content=""></head>')
        assert meta_content(doc, "description") == ""
        assert has_meta(doc, "description") is True


class TestAttributes:
    """Tests for attribute helpers."""

    def test_multi_valued_attribute_joined(self):
        doc = parse_document('<link rel="shortcut icon" href="/f.ico">')
        assert attr_str(doc.find("link"), "rel") == "shortcut icon"

    def test_missing_attribute_is_empty(self):
        doc = parse_document("<img src='a.png'>")
        assert attr_str(doc.find("img"), "alt") == ""

    def test_find_links_by_rel_token(self):
        doc = parse_document(
            '<head><link rel="Canonical" href="/a"><link rel="stylesheet" href="/s.css"></head>'
        )
        assert len(find_links(doc, "canonical")) == 1
        assert len(find_links(doc, "icon")) == 0
