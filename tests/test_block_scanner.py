"""
Tests for the block_scanner module.
"""

from rewrite_patcher.block_scanner import (
    innermost_block,
    leaf_blocks,
    scan_blocks,
    scan_headings,
)


class TestScanBlocks:
    """Tests for scan_blocks."""

    def test_offsets_and_verbatim_tags(self):
        """Records exact tag strings and inner range."""
        doc = '<p class="lead">Hello</p>'
        [block] = scan_blocks(doc)
        assert block.name == "p"
        assert block.open_tag == '<p class="lead">'
        assert block.close_tag == "</p>"
        assert block.start == 0
        assert block.end == len(doc)
        assert block.inner_html(doc) == "Hello"

    def test_nested_same_name(self):
        """Nested divs are paired correctly."""
        doc = "<div>a<div>b</div>c</div>"
        outer, inner = scan_blocks(doc)
        assert outer.inner_html(doc) == "a<div>b</div>c"
        assert inner.inner_html(doc) == "b"
        assert outer.contains(inner)
        assert not inner.contains(outer)
        assert outer.has_nested_blocks
        assert not inner.has_nested_blocks
        assert inner.depth == outer.depth + 1

    def test_inline_tags_are_opaque(self):
        """Inline tags do not create elements or nesting."""
        doc = "<p>Some <strong>bold</strong> text</p>"
        [block] = scan_blocks(doc)
        assert not block.has_nested_blocks
        assert block.inner_html(doc) == "Some <strong>bold</strong> text"

    def test_unclosed_element_is_dropped(self):
        """An unclosed element does not swallow the rest of the document."""
        doc = "<div><p>Open paragraph</div><p>Closed</p>"
        blocks = scan_blocks(doc)
        assert [b.name for b in blocks] == ["div", "p"]
        assert blocks[1].inner_html(doc) == "Closed"

    def test_filter_by_tags(self):
        """Only the requested tags are returned."""
        doc = "<section><p>One</p></section><li>Two</li>"
        assert [b.name for b in scan_blocks(doc, ("li",))] == ["li"]

    def test_uppercase_tags(self):
        """Tag names are matched case-insensitively."""
        doc = "<P>Upper</P>"
        [block] = scan_blocks(doc)
        assert block.name == "p"
        assert block.inner_html(doc) == "Upper"


class TestScanHeadings:
    """Tests for scan_headings."""

    def test_finds_standard_headings(self):
        """h1-h6 are headings, paragraphs are not."""
        doc = "<h1>One</h1><p>Body</p><h3>Three</h3>"
        assert [h.name for h in scan_headings(doc)] == ["h1", "h3"]

    def test_finds_tiptap_headings(self):
        """Editor headings marked with data-type are included."""
        doc = '<div data-type="heading" data-level="2">Editor title</div><div>Body</div>'
        [heading] = scan_headings(doc)
        assert heading.is_heading
        assert heading.inner_html(doc) == "Editor title"


class TestLeafAndInnermost:
    """Tests for leaf_blocks and innermost_block."""

    def test_leaf_blocks_skip_containers(self):
        """Containers of other blocks are not leaves."""
        doc = "<article><p>One</p><p>Two</p></article>"
        assert [b.inner_html(doc) for b in leaf_blocks(doc)] == ["One", "Two"]

    def test_innermost_block(self):
        """The deepest covering block is returned."""
        doc = "<div><p>Inside text</p></div>"
        blocks = scan_blocks(doc)
        start = doc.index("Inside")
        block = innermost_block(blocks, start, start + len("Inside text"))
        assert block.name == "p"

    def test_innermost_block_none_when_crossing(self):
        """A region spanning two siblings has no covering leaf."""
        doc = "<p>First</p><p>Second</p>"
        blocks = scan_blocks(doc)
        assert innermost_block(blocks, doc.index("First"), doc.index("Second") + 6) is None
