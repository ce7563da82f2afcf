"""
Similarity scoring between two text spans.

The score is the maximum of four independent signals, ordered so that
exact or near-exact evidence always outranks structural evidence:

- containment (one text contains the other)
- leading words (titles and intros usually keep their first words)
- meaningful-word overlap (paraphrased prose)
- punctuation skeleton (templated structures)
"""

import re
from typing import Optional

from .config import DEFAULT_CONFIG, PatchConfig
from .text_projection import meaningful_words, tokenize

ALPHANUMERIC_PATTERN = re.compile(r"[a-zA-Z0-9]")

LEADING_WORD_COUNT = 3


def skeleton(text: str) -> str:
    """Replace alphanumerics with a placeholder, keeping punctuation."""
    return ALPHANUMERIC_PATTERN.sub("x", text)


def overlap_ratio(a: str, b: str, min_length: int = 4) -> float:
    """
    Share of meaningful words the two texts have in common.

    Args:
        a: First text.
        b: Second text.
        min_length: Words strictly longer than this are meaningful.

    Returns:
        Distinct common meaningful words divided by the smaller of the two
        distinct meaningful-word counts, or 0.0 if either text has none.
    """
    words_a = set(meaningful_words(a, min_length))
    words_b = set(meaningful_words(b, min_length))
    if not words_a or not words_b:
        return 0.0
    common = words_a & words_b
    return len(common) / min(len(words_a), len(words_b))


def score(a: str, b: str, config: Optional[PatchConfig] = None) -> float:
    """
    Score how alike two text spans are.

    Args:
        a: First text (usually a candidate from the document).
        b: Second text (usually the projected fragment).
        config: Scoring weights. Defaults to ``DEFAULT_CONFIG``.

    Returns:
        Similarity in [0, 1]; 0.0 when no signal applies.
    """
    config = config or DEFAULT_CONFIG
    if not a or not b:
        return 0.0

    best = 0.0

    if a in b or b in a:
        best = max(best, config.containment_score)

    words_a = tokenize(a)
    words_b = tokenize(b)
    if len(words_a) >= LEADING_WORD_COUNT and len(words_b) >= LEADING_WORD_COUNT:
        lead_a = " ".join(words_a[:LEADING_WORD_COUNT]).lower()
        lead_b = " ".join(words_b[:LEADING_WORD_COUNT]).lower()
        if lead_a == lead_b:
            best = max(best, config.leading_words_score)

    ratio = overlap_ratio(a, b, config.meaningful_word_length)
    if ratio > config.min_overlap_ratio:
        best = max(best, config.overlap_base + config.overlap_weight * ratio)

    if skeleton(a) == skeleton(b):
        best = max(best, config.skeleton_score)

    return best
