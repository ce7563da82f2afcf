"""
Tag-preserving patch application.

Substitutes the replacement text for a located span. When the span has an
enclosing tag, the element's open and close tags are reused verbatim and
only plain text goes between them.
"""

import logging
from typing import Optional

from .models import MatchResult
from .text_projection import inner_text

logger = logging.getLogger(__name__)


class SpanMismatchError(ValueError):
    """Raised when a span no longer lines up with the document."""
    pass


def build_replacement(match: MatchResult, improved: str) -> str:
    """
    Build the text that replaces the matched region.

    Args:
        match: Located span and strategy.
        improved: Improved fragment text, used unless the match carries
            its own replacement.

    Returns:
        ``open_tag + inner_text + close_tag`` for tag-enclosed spans,
        otherwise the replacement as given.
    """
    text = match.replacement if match.replacement is not None else improved
    tag = match.span.enclosing_tag
    if tag is None:
        return text
    return f"{tag.open_tag}{inner_text(text)}{tag.close_tag}"


def apply_patch(document: str, match: MatchResult, improved: Optional[str] = None) -> str:
    """
    Substitute the replacement into the document.

    Args:
        document: Document the match was located in.
        match: Match returned by the locator.
        improved: Improved fragment text.

    Returns:
        The updated document.

    Raises:
        SpanMismatchError: If the span is out of range or the enclosing tag
            strings are not where the span says they are.
    """
    span = match.span
    start, end = span.outer_start, span.outer_end
    if not 0 <= start <= end <= len(document):
        raise SpanMismatchError(f"Span [{start}:{end}] outside document of length {len(document)}")

    tag = span.enclosing_tag
    if tag is not None:
        if document[start:span.start] != tag.open_tag or document[span.end:end] != tag.close_tag:
            raise SpanMismatchError(f"Enclosing <{tag.name}> tags not found around span")

    replacement = build_replacement(match, improved or "")
    logger.debug(f"Replacing [{start}:{end}] using {match.strategy.value} match")
    return document[:start] + replacement + document[end:]
