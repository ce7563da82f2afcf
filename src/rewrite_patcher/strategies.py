"""
Fragment-location strategies.

Each strategy is a plain function ``(document, fragment, config)`` that
returns a ``MatchResult`` or None. Strategies never modify the document;
they only describe where the fragment sits and what should replace it.

Search patterns are always built from escaped literals joined by ``\\s+``
or a bounded ``[\\s\\S]{0,N}?`` gap, so suggestion text cannot introduce
catastrophic backtracking.
"""

import logging
import re
from typing import Callable, Optional

from .block_scanner import (
    CHUNK_TAGS,
    PARAGRAPH_TAGS,
    innermost_block,
    leaf_blocks,
    scan_blocks,
    scan_headings,
)
from .config import PatchConfig
from .models import BlockElement, Fragment, MatchResult, Span, StrategyId
from .similarity import score
from .text_projection import (
    content_words,
    has_markup,
    project,
    split_sentences,
    tokenize,
    whitespace_flexible_pattern,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[str, Fragment, PatchConfig], Optional[MatchResult]]

HEADING_MARKUP_PATTERN = re.compile(
    r"""<h[1-6][\s>]|data-type\s*=\s*['"]heading['"]""",
    re.IGNORECASE,
)

MIN_CHUNK_TEXT_CHARS = 10
MIN_CHUNK_EDGE_CHARS = 5


class PatternBuildError(ValueError):
    """Raised when fragment text cannot be compiled into a search pattern."""
    pass


def compile_pattern(source: str, flags: int = 0) -> re.Pattern:
    """
    Compile a search pattern built from fragment text.

    Raises:
        PatternBuildError: If the pattern does not compile.
    """
    try:
        return re.compile(source, flags)
    except re.error as e:
        raise PatternBuildError(f"Could not compile search pattern: {e}") from e


# =============================================================================
# EXACT AND WHITESPACE-NORMALIZED
# =============================================================================

def find_exact(document: str, fragment: Fragment, config: PatchConfig) -> Optional[MatchResult]:
    """Raw substring search for the original text."""
    if not fragment.original:
        return None
    index = document.find(fragment.original)
    if index < 0:
        return None
    return MatchResult(
        span=Span(start=index, end=index + len(fragment.original)),
        strategy=StrategyId.EXACT,
        confidence=config.exact_confidence,
    )


def find_whitespace_normalized(
    document: str,
    fragment: Fragment,
    config: PatchConfig,
) -> Optional[MatchResult]:
    """Search for the raw original with flexible whitespace between words."""
    source = whitespace_flexible_pattern(fragment.original)
    if not source:
        return None
    match = compile_pattern(source, re.IGNORECASE).search(document)
    if not match:
        return None
    return MatchResult(
        span=Span(start=match.start(), end=match.end()),
        strategy=StrategyId.WHITESPACE,
        confidence=config.whitespace_confidence,
    )


# =============================================================================
# HEADING AND BLOCK
# =============================================================================

def looks_like_heading(original: str, config: PatchConfig) -> bool:
    """
    Check if a fragment is likely a heading.

    A fragment qualifies if it carries heading markup, or if it is short,
    does not end like a sentence and its longer words are all capitalized.
    Short lowercase prose is left to the block strategy.
    """
    if HEADING_MARKUP_PATTERN.search(original):
        return True

    plain = project(original)
    words = tokenize(plain)
    if not words or len(words) > config.heading_max_words or plain.endswith((".", "!")):
        return False

    long_words = [word for word in words if len(word) > 3]
    return bool(long_words) and all(word[0].isupper() for word in long_words)


def _heading_text(original: str) -> str:
    """Plain text of the first heading in ``original``, else all of it."""
    headings = scan_headings(original)
    if headings:
        return project(headings[0].inner_html(original))
    return project(original)


def find_heading(document: str, fragment: Fragment, config: PatchConfig) -> Optional[MatchResult]:
    """
    Match the fragment against the document's headings.

    The span covers the heading's inner text; the heading's own open and
    close tags, attributes included, become the enclosing tag.
    """
    if not looks_like_heading(fragment.original, config):
        return None

    target = _heading_text(fragment.original)
    if not target:
        return None

    best: Optional[BlockElement] = None
    best_score = 0.0
    for heading in scan_headings(document):
        text = project(heading.inner_html(document))
        similarity = score(text, target, config)
        logger.debug(f"Heading candidate '{text[:40]}' scored {similarity:.2f}")
        if similarity >= config.heading_floor and similarity > best_score:
            best = heading
            best_score = similarity

    if best is None:
        return None
    return MatchResult(span=best.to_span(), strategy=StrategyId.HEADING, confidence=best_score)


def find_block(document: str, fragment: Fragment, config: PatchConfig) -> Optional[MatchResult]:
    """
    Match the fragment against block elements by plain-text similarity.

    Blocks whose plain text is under half or over double the fragment's
    length are skipped. On a tie, the earlier block wins unless the later
    one is nested inside it.
    """
    target = project(fragment.original)
    if not target:
        return None

    min_length = len(target) * config.block_min_length_ratio
    max_length = len(target) * config.block_max_length_ratio

    best: Optional[BlockElement] = None
    best_score = 0.0
    for block in scan_blocks(document):
        text = project(block.inner_html(document))
        if len(text) < config.min_block_chars or len(text) < min_length or len(text) > max_length:
            continue

        similarity = score(text, target, config)
        if similarity < config.block_floor:
            continue
        if best is None or similarity > best_score or (
            similarity == best_score and best.contains(block)
        ):
            best = block
            best_score = similarity

    if best is None:
        return None
    logger.debug(f"Block <{best.name}> matched with {best_score:.2f} similarity")
    return MatchResult(span=best.to_span(), strategy=StrategyId.BLOCK, confidence=best_score)


# =============================================================================
# FALLBACKS
# =============================================================================

def find_sentence_fragment(
    document: str,
    fragment: Fragment,
    config: PatchConfig,
) -> Optional[MatchResult]:
    """
    Locate the longest sentence of the original and swap only that sentence.

    The replacement is the sentence of the improved text that scores best
    against the located sentence.
    """
    if not config.enable_fallbacks:
        return None

    candidates = [
        sentence for sentence in split_sentences(project(fragment.original))
        if len(sentence) >= config.sentence_min_chars
    ]
    if not candidates:
        return None
    candidates.sort(key=len, reverse=True)
    improved_sentences = split_sentences(project(fragment.improved))

    for candidate in candidates:
        match = compile_pattern(whitespace_flexible_pattern(candidate), re.IGNORECASE).search(document)
        if not match:
            continue

        best_sentence = None
        best_score = 0.0
        for sentence in improved_sentences:
            similarity = score(candidate, sentence, config)
            if similarity > best_score:
                best_sentence = sentence
                best_score = similarity

        if best_sentence is None:
            logger.debug(f"No improved sentence resembles '{candidate[:40]}'")
            continue

        return MatchResult(
            span=Span(start=match.start(), end=match.end()),
            strategy=StrategyId.SENTENCE,
            confidence=best_score,
            replacement=best_sentence,
        )
    return None


def _block_for_chunk(document: str, start: int, end: int) -> Optional[BlockElement]:
    """Leaf block that fully contains a chunk which crosses markup."""
    block = innermost_block(scan_blocks(document, CHUNK_TAGS), start, end)
    if block is None or block.has_nested_blocks:
        return None
    return block


def _best_overlap_block(
    document: str,
    target: str,
    replacement: str,
    config: PatchConfig,
) -> Optional[MatchResult]:
    """
    Leaf block sharing the most meaningful words with the target.

    A target word counts as shared when it appears anywhere in the block's
    lowercased text. Blocks outside the block-strategy length band are
    skipped, and the winner must contain at least ``min_shared_share`` of
    the target's meaningful words.
    """
    words = set(content_words(target, config.meaningful_word_length))
    if len(words) < config.min_shared_words:
        return None

    min_length = len(target) * config.block_min_length_ratio
    max_length = len(target) * config.block_max_length_ratio

    best: Optional[BlockElement] = None
    best_shared = config.min_shared_words - 1
    for block in leaf_blocks(document, PARAGRAPH_TAGS):
        text = project(block.inner_html(document))
        if len(text) < min_length or len(text) > max_length:
            continue
        lowered = text.lower()
        shared = sum(1 for word in words if word in lowered)
        if shared > best_shared:
            best = block
            best_shared = shared

    if best is None:
        return None

    share = best_shared / len(words)
    if share < config.min_shared_share:
        logger.debug(
            f"Overlap fallback rejected <{best.name}>: {best_shared} of {len(words)} words shared"
        )
        return None

    logger.debug(f"Overlap fallback picked <{best.name}> sharing {best_shared} words")
    return MatchResult(
        span=best.to_span(),
        strategy=StrategyId.CHUNK,
        confidence=config.chunk_confidence * share,
        replacement=replacement,
    )


def find_chunk_boundary(
    document: str,
    fragment: Fragment,
    config: PatchConfig,
) -> Optional[MatchResult]:
    """
    Best-effort match on the fragment's first and last words.

    Catches paraphrases where only the middle changed. A hit without
    markup is replaced in place; a hit crossing markup is widened to its
    leaf block so no tag is cut. Falls back to the leaf block with the most
    meaningful words in common.
    """
    if not config.enable_fallbacks:
        return None

    target = project(fragment.original)
    replacement = project(fragment.improved)
    words = tokenize(target)
    edge = config.chunk_edge_tokens

    if len(target) >= MIN_CHUNK_TEXT_CHARS and len(words) >= 2 * edge:
        first = " ".join(words[:edge])
        last = " ".join(words[-edge:])
        if len(first) > MIN_CHUNK_EDGE_CHARS and len(last) > MIN_CHUNK_EDGE_CHARS:
            gap = max(config.chunk_max_gap, 2 * len(target))
            source = (
                whitespace_flexible_pattern(first)
                + r"[\s\S]{0,%d}?" % gap
                + whitespace_flexible_pattern(last)
            )
            match = compile_pattern(source, re.IGNORECASE).search(document)
            if match:
                if not has_markup(match.group(0)):
                    return MatchResult(
                        span=Span(start=match.start(), end=match.end()),
                        strategy=StrategyId.CHUNK,
                        confidence=config.chunk_confidence,
                        replacement=replacement,
                    )
                block = _block_for_chunk(document, match.start(), match.end())
                if block is not None:
                    return MatchResult(
                        span=block.to_span(),
                        strategy=StrategyId.CHUNK,
                        confidence=config.chunk_confidence,
                        replacement=replacement,
                    )
                logger.debug("Chunk match crosses block boundaries, ignoring it")

    return _best_overlap_block(document, target, replacement, config)


DEFAULT_STRATEGIES: tuple[Strategy, ...] = (
    find_exact,
    find_whitespace_normalized,
    find_heading,
    find_block,
    find_sentence_fragment,
    find_chunk_boundary,
)
