# -*- coding: utf-8 -*-
"""
Plain-text projection of HTML documents.

Handles:
- Tag stripping and whitespace normalization for comparison text
- Tokenization into words, meaningful words and sentences
- Whitespace-flexible search patterns built from escaped literals

The projection is only ever used to build comparison text. Offsets back
into the markup are computed per strategy, never through a generic map.
"""

import re
from typing import Optional

TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
WORD_EDGE_PATTERN = re.compile(r"^\W+|\W+$")


def project(html: Optional[str]) -> str:
    """
    Strip markup and normalize whitespace.

    Args:
        html: Document or fragment text, possibly containing tags.

    Returns:
        Plain text with single spaces, trimmed.
    """
    if not html:
        return ""
    text = TAG_PATTERN.sub(" ", html)
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def inner_text(html: Optional[str]) -> str:
    """Text inserted between preserved tags: the projection of ``html``."""
    return project(html)


def has_markup(text: str) -> bool:
    """Check if text contains anything that looks like a tag."""
    return bool(TAG_PATTERN.search(text))


def tokenize(text: str) -> list[str]:
    """Split text on whitespace."""
    return text.split()


def meaningful_words(text: str, min_length: int = 4) -> list[str]:
    """
    Get lowercased words longer than ``min_length`` characters.

    Short words are mostly articles and prepositions, so only longer
    words are treated as evidence that two texts talk about the same thing.
    """
    return [word.lower() for word in tokenize(text) if len(word) > min_length]


def content_words(text: str, min_length: int = 4) -> list[str]:
    """Like ``meaningful_words``, with leading and trailing punctuation removed."""
    words = (WORD_EDGE_PATTERN.sub("", word.lower()) for word in tokenize(text))
    return [word for word in words if len(word) > min_length]


def split_sentences(text: str) -> list[str]:
    """
    Split text on sentence terminators.

    Terminators are dropped and pieces trimmed; empty pieces are removed.
    """
    pieces = SENTENCE_SPLIT_PATTERN.split(text)
    return [piece.strip() for piece in pieces if piece.strip()]


def whitespace_flexible_pattern(text: str) -> str:
    """
    Build a regex source matching ``text`` with any whitespace between words.

    Each word is escaped, so the pattern contains no unbounded constructs
    besides ``\\s+`` between literals.

    Args:
        text: Literal text to search for.

    Returns:
        Regex source, or an empty string when ``text`` has no words.
    """
    words = tokenize(text)
    if not words:
        return ""
    return r"\s+".join(re.escape(word) for word in words)


def count_words(html: str) -> int:
    """Count words in the rendered text of a document."""
    return len(tokenize(project(html)))
