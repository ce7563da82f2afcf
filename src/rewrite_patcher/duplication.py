"""
Duplicate content scrubbing.

Imprecise matching can leave the old text next to its replacement. After
each applied patch this module removes:
- Exact duplicate sentences within a block
- Repeated runs of the improved text that sit close together

Each block is handled on its own, never across block boundaries, and a
removal is only kept if the block retains more than the configured share
of its rendered length. Skipped removals are logged, not raised.
After a patch only the blocks touching the patched region are scrubbed,
so duplication already present elsewhere in the document is left alone.
"""

import logging
import re
from typing import Iterator, Optional

from .block_scanner import leaf_blocks
from .config import DEFAULT_CONFIG, PatchConfig
from .models import BlockElement
from .text_projection import has_markup, project, tokenize, whitespace_flexible_pattern

logger = logging.getLogger(__name__)

SENTENCE_SEGMENT_PATTERN = re.compile(r"[^.!?]*[.!?]+")
WORD_CHAR_PATTERN = re.compile(r"\w")

MAX_RUN_TOKENS = 64


def find_duplicate_sentences(text: str, min_tokens: int = 5) -> list[tuple[int, int]]:
    """
    Find repeated sentences in a block's inner markup.

    Sentences are compared after projection, so differences in whitespace
    do not hide a repeat. Sentences containing markup are never reported,
    since removing them could unbalance tags.

    Args:
        text: Inner markup of one block.
        min_tokens: Shorter sentences are ignored.

    Returns:
        ``(start, end)`` ranges of the second and later occurrences,
        including the whitespace that precedes each one.
    """
    seen: set[str] = set()
    duplicates = []

    for segment in SENTENCE_SEGMENT_PATTERN.finditer(text):
        raw = segment.group(0)
        key = project(raw)
        if len(tokenize(key)) < min_tokens:
            continue
        if key in seen:
            if not has_markup(raw):
                duplicates.append((segment.start(), segment.end()))
        else:
            seen.add(key)

    return duplicates


def find_repeated_windows(
    text: str,
    improved: str,
    window: int = 8,
    proximity: int = 50,
) -> Iterator[tuple[int, int]]:
    """
    Find runs of the improved text that occur twice close together.

    Runs are tried from the longest (up to ``MAX_RUN_TOKENS``) down to
    ``window`` tokens, so a fully repeated replacement collapses in one
    step instead of being trimmed window by window.

    Args:
        text: Inner markup of one block.
        improved: Improved fragment text.
        window: Minimum tokens per run.
        proximity: Max characters between the two occurrences.

    Yields:
        Ranges whose removal collapses a pair to a single occurrence. When
        only punctuation or whitespace separates the pair, the separator
        goes too.
    """
    tokens = tokenize(project(improved))
    plain = project(text)
    if not any(
        plain.count(" ".join(tokens[i:i + window])) >= 2
        for i in range(len(tokens) - window + 1)
    ):
        return

    seen_phrases: set[str] = set()
    for size in range(min(len(tokens), MAX_RUN_TOKENS), window - 1, -1):
        for i in range(len(tokens) - size + 1):
            phrase = " ".join(tokens[i:i + size])
            if phrase in seen_phrases:
                continue
            seen_phrases.add(phrase)

            occurrences = list(re.finditer(whitespace_flexible_pattern(phrase), text))
            for previous, current in zip(occurrences, occurrences[1:]):
                if current.start() - previous.end() > proximity:
                    continue
                gap = text[previous.end():current.start()]
                if "<" in gap or ">" in gap:
                    continue
                if WORD_CHAR_PATTERN.search(gap):
                    yield current.start(), current.end()
                else:
                    yield previous.end(), current.end()


def _remove_range(text: str, start: int, end: int) -> str:
    """Cut ``[start, end)`` and avoid leaving a double space at the join."""
    before = text[:start]
    after = text[end:]
    if before[-1:].isspace() and after[:1].isspace():
        after = after.lstrip()
    return before + after


def _retains_enough(candidate: str, base_length: int, floor: float) -> bool:
    if base_length == 0:
        return True
    return len(project(candidate)) > floor * base_length


def scrub_block(
    inner: str,
    improved: Optional[str] = None,
    config: Optional[PatchConfig] = None,
) -> str:
    """
    Remove duplication from one block's inner markup.

    Args:
        inner: Inner markup of the block.
        improved: Improved text of the patch just applied, if any.
        config: Thresholds. Defaults to ``DEFAULT_CONFIG``.

    Returns:
        The cleaned inner markup (unchanged if nothing safe to remove).
    """
    config = config or DEFAULT_CONFIG
    base_length = len(project(inner))
    result = inner

    def _collapse(find_ranges, label: str) -> None:
        nonlocal result
        rejected: set[str] = set()
        while True:
            for start, end in find_ranges(result):
                removed = result[start:end]
                if removed in rejected:
                    continue
                candidate = _remove_range(result, start, end)
                if _retains_enough(candidate, base_length, config.retention_floor):
                    logger.info(f"Removed {label}: '{removed.strip()[:60]}'")
                    result = candidate
                    break
                rejected.add(removed)
                logger.warning(
                    f"Skipped unsafe {label} removal: block would keep no more than "
                    f"{config.retention_floor:.0%} of its length"
                )
            else:
                return

    _collapse(
        lambda text: find_duplicate_sentences(text, config.duplicate_sentence_tokens),
        "duplicate sentence",
    )
    if improved:
        _collapse(
            lambda text: find_repeated_windows(
                text,
                improved,
                config.duplicate_window_tokens,
                config.duplicate_proximity_chars,
            ),
            "repeated phrase",
        )

    return result


def _touches(block: BlockElement, start: int, end: int) -> bool:
    """Check if a block overlaps ``[start, end)``, or contains it when empty."""
    if start == end:
        return block.start <= start <= block.end
    return block.start < end and start < block.end


def scrub(
    document: str,
    improved: Optional[str] = None,
    config: Optional[PatchConfig] = None,
    region: Optional[tuple[int, int]] = None,
) -> str:
    """
    Remove duplicated sentences and phrases from paragraph-like blocks.

    A document without any block element is treated as a single block.

    Args:
        document: HTML document string.
        improved: Improved text of the patch just applied, if any.
        config: Thresholds. Defaults to ``DEFAULT_CONFIG``.
        region: ``(start, end)`` of the patched text. When given, only the
            blocks touching it are scrubbed; otherwise every block is.

    Returns:
        The cleaned document.
    """
    config = config or DEFAULT_CONFIG
    blocks = leaf_blocks(document)
    if not blocks:
        return scrub_block(document, improved, config)
    if region is not None:
        blocks = [block for block in blocks if _touches(block, *region)]

    result = document
    # Leaf blocks never overlap, so editing from the end keeps earlier offsets valid
    for block in reversed(blocks):
        inner = block.inner_html(result)
        cleaned = scrub_block(inner, improved, config)
        if cleaned != inner:
            result = result[:block.inner_start] + cleaned + result[block.inner_end:]
    return result
