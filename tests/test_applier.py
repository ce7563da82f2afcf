"""
Tests for the applier module.
"""

import pytest

from rewrite_patcher.applier import SpanMismatchError, apply_patch, build_replacement
from rewrite_patcher.models import EnclosingTag, MatchResult, Span, StrategyId


def _tagged_match(doc: str, open_tag: str, close_tag: str, name: str = "h2") -> MatchResult:
    start = doc.index(open_tag) + len(open_tag)
    end = doc.index(close_tag, start)
    return MatchResult(
        span=Span(start, end, EnclosingTag(name, open_tag, close_tag)),
        strategy=StrategyId.HEADING,
        confidence=0.9,
    )


class TestApplyPatch:
    """Tests for apply_patch."""

    def test_plain_splice(self):
        """Without an enclosing tag the text goes in as given."""
        doc = "<p>The cat sat on the mat.</p>"
        match = MatchResult(Span(3, 26), StrategyId.EXACT, 1.0)
        assert apply_patch(doc, match, "The cat rested on the mat.") == "<p>The cat rested on the mat.</p>"

    def test_plain_splice_keeps_markup_in_improved(self):
        """Inline markup in the improved text is kept for plain spans."""
        doc = "<p>Buy now</p>"
        match = MatchResult(Span(3, 10), StrategyId.EXACT, 1.0)
        assert apply_patch(doc, match, "Buy <b>today</b>") == "<p>Buy <b>today</b></p>"

    def test_enclosing_tag_preserved(self):
        """Attributes of the matched element stay untouched."""
        doc = '<h2 class="x" data-id="1">Intro to SEO</h2>'
        match = _tagged_match(doc, '<h2 class="x" data-id="1">', "</h2>")
        result = apply_patch(doc, match, "<h2>Introduction to SEO</h2>")
        assert result == '<h2 class="x" data-id="1">Introduction to SEO</h2>'

    def test_match_replacement_overrides_improved(self):
        """A strategy-provided replacement takes precedence."""
        doc = "<p>Old sentence here</p>"
        match = MatchResult(Span(3, 20), StrategyId.SENTENCE, 0.8, replacement="New sentence")
        assert apply_patch(doc, match, "ignored") == "<p>New sentence</p>"

    def test_tag_mismatch_raises(self):
        """Tags that are not where the span says raise SpanMismatchError."""
        doc = "<h2>Title</h2>"
        match = MatchResult(
            Span(4, 9, EnclosingTag("h3", "<h3>", "</h3>")),
            StrategyId.HEADING,
            0.9,
        )
        with pytest.raises(SpanMismatchError):
            apply_patch(doc, match, "New")

    def test_out_of_range_raises(self):
        """Spans outside the document raise SpanMismatchError."""
        match = MatchResult(Span(5, 50), StrategyId.EXACT, 1.0)
        with pytest.raises(SpanMismatchError):
            apply_patch("<p>short</p>", match, "x")


class TestBuildReplacement:
    """Tests for build_replacement."""

    def test_strips_markup_inside_tags(self):
        """Improved markup is reduced to text between preserved tags."""
        match = MatchResult(
            Span(4, 9, EnclosingTag("p", '<p class="a">', "</p>")),
            StrategyId.BLOCK,
            0.7,
        )
        assert build_replacement(match, "<p><strong>Bold</strong> claim</p>") == '<p class="a">Bold claim</p>'
