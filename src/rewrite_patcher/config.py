# -*- coding: utf-8 -*-
"""
Centralized configuration for the rewrite patcher.

Every threshold used by the matching chain, the similarity scorer and the
duplicate scrubber lives here as a named, overridable field. The defaults
are the empirically tuned values of the editor that produces the fragments.
"""

from dataclasses import dataclass


@dataclass
class PatchConfig:
    """
    Central configuration for fragment location and patching.

    Attributes:
        exact_confidence: Confidence reported for a raw substring hit.
        whitespace_confidence: Confidence reported when the original only
            matches after runs of whitespace are made flexible.
        heading_floor: Minimum similarity for a heading candidate.
        block_floor: Minimum similarity for a block-level candidate.

        containment_score: Score when one text contains the other.
        leading_words_score: Score when the first three words match.
        overlap_base / overlap_weight: Meaningful-word overlap scores
            ``overlap_base + overlap_weight * ratio``.
        min_overlap_ratio: The overlap score only applies above this ratio.
        skeleton_score: Score when both texts share the same punctuation
            skeleton.
        meaningful_word_length: Words strictly longer than this count as
            meaningful.

        block_min_length_ratio / block_max_length_ratio: Blocks whose plain
            text is outside this band relative to the fragment are skipped.
        min_block_chars: Blocks with less plain text than this are skipped.
        heading_max_words: Title-cased fragments up to this many words may
            be headings.

        sentence_min_chars: Shortest sentence usable as an anchor by the
            sentence-fragment strategy.
        chunk_edge_tokens: Tokens taken from each end of the fragment by the
            chunk-boundary strategy.
        chunk_max_gap: Cap on the characters allowed between the edges.
        chunk_confidence: Confidence reported by the chunk-boundary
            strategy; the overlap fallback scales it by the shared share.
        min_shared_words: Meaningful words a block must share with the
            fragment for the overlap fallback.
        min_shared_share: Share of the fragment's meaningful words the
            overlap fallback's block must contain.
        enable_fallbacks: Run the sentence-fragment and chunk strategies.

        scrub_enabled: Run the duplicate scrubber after each patch.
        retention_floor: A duplicate removal is kept only if the block
            retains more than this fraction of its rendered length.
        duplicate_sentence_tokens: Minimum tokens for a sentence to be
            considered a duplicate.
        duplicate_window_tokens: Window size over the improved text.
        duplicate_proximity_chars: Max distance between two window copies.
    """

    # Fixed strategy confidences
    exact_confidence: float = 1.0
    whitespace_confidence: float = 0.95

    # Strategy floors
    heading_floor: float = 0.8
    block_floor: float = 0.6

    # Similarity scorer
    containment_score: float = 0.9
    leading_words_score: float = 0.85
    overlap_base: float = 0.7
    overlap_weight: float = 0.2
    min_overlap_ratio: float = 0.5
    skeleton_score: float = 0.6
    meaningful_word_length: int = 4

    # Candidate guards
    block_min_length_ratio: float = 0.5
    block_max_length_ratio: float = 2.0
    min_block_chars: int = 5
    heading_max_words: int = 10

    # Fallback strategies
    sentence_min_chars: int = 15
    chunk_edge_tokens: int = 3
    chunk_max_gap: int = 500
    chunk_confidence: float = 0.5
    min_shared_words: int = 2
    min_shared_share: float = 0.5
    enable_fallbacks: bool = True

    # Duplicate scrubbing
    scrub_enabled: bool = True
    retention_floor: float = 0.7
    duplicate_sentence_tokens: int = 5
    duplicate_window_tokens: int = 8
    duplicate_proximity_chars: int = 50

    def __post_init__(self):
        """Validate configuration values."""
        for name in (
            "exact_confidence",
            "whitespace_confidence",
            "heading_floor",
            "block_floor",
            "containment_score",
            "leading_words_score",
            "min_overlap_ratio",
            "skeleton_score",
            "chunk_confidence",
            "min_shared_share",
            "retention_floor",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if self.overlap_base + self.overlap_weight > 1.0:
            raise ValueError(
                f"overlap_base + overlap_weight must be <= 1, "
                f"got {self.overlap_base + self.overlap_weight}"
            )
        if self.block_min_length_ratio > self.block_max_length_ratio:
            raise ValueError(
                f"block_min_length_ratio ({self.block_min_length_ratio}) must be <= "
                f"block_max_length_ratio ({self.block_max_length_ratio})"
            )
        if self.chunk_edge_tokens < 1:
            raise ValueError(f"chunk_edge_tokens must be >= 1, got {self.chunk_edge_tokens}")
        if self.chunk_max_gap < 0:
            raise ValueError(f"chunk_max_gap must be >= 0, got {self.chunk_max_gap}")
        if self.min_shared_words < 1:
            raise ValueError(f"min_shared_words must be >= 1, got {self.min_shared_words}")
        if self.duplicate_sentence_tokens < 1:
            raise ValueError(
                f"duplicate_sentence_tokens must be >= 1, got {self.duplicate_sentence_tokens}"
            )
        if self.duplicate_window_tokens < 2:
            raise ValueError(
                f"duplicate_window_tokens must be >= 2, got {self.duplicate_window_tokens}"
            )

    @classmethod
    def strict(cls, **overrides) -> "PatchConfig":
        """Create config that only accepts confident matches.

        Strict mode:
        - Sentence-fragment and chunk-boundary fallbacks disabled
        - Higher block floor

        Args:
            **overrides: Override any config values.

        Returns:
            PatchConfig with strict defaults.
        """
        defaults = {
            "enable_fallbacks": False,
            "block_floor": 0.7,
        }
        defaults.update(overrides)
        return cls(**defaults)

    @classmethod
    def lenient(cls, **overrides) -> "PatchConfig":
        """Create config that tolerates heavier drift.

        Args:
            **overrides: Override any config values.

        Returns:
            PatchConfig with lowered floors and wider length guards.
        """
        defaults = {
            "heading_floor": 0.7,
            "block_floor": 0.5,
            "block_min_length_ratio": 0.3,
            "block_max_length_ratio": 3.0,
        }
        defaults.update(overrides)
        return cls(**defaults)


DEFAULT_CONFIG = PatchConfig()
