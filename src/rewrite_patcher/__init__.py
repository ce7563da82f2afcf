"""
Rewrite Patcher

Applies AI-proposed text rewrites to a live HTML document:
- Locates each original fragment even when whitespace, tags or wording drifted
- Substitutes the improved text while preserving the surrounding markup
- Applies batches strictly in order and scrubs accidental duplication
"""

__version__ = "1.0.0"
__author__ = "Rewrite Patcher Team"

from .config import PatchConfig, DEFAULT_CONFIG

from .models import (
    StrategyId,
    Fragment,
    EnclosingTag,
    Span,
    MatchResult,
    PatchOutcome,
    FragmentReport,
    BatchOutcome,
    BlockElement,
)

from .text_projection import (
    project,
    inner_text,
    count_words,
)

from .similarity import score

from .strategies import (
    DEFAULT_STRATEGIES,
    PatternBuildError,
    find_exact,
    find_whitespace_normalized,
    find_heading,
    find_block,
    find_sentence_fragment,
    find_chunk_boundary,
)

from .locator import FragmentLocator, locate

from .applier import SpanMismatchError, apply_patch

from .duplication import scrub

from .engine import PatchEngine, apply_one, apply_batch

__all__ = [
    # Configuration
    "PatchConfig",
    "DEFAULT_CONFIG",
    # Models
    "StrategyId",
    "Fragment",
    "EnclosingTag",
    "Span",
    "MatchResult",
    "PatchOutcome",
    "FragmentReport",
    "BatchOutcome",
    "BlockElement",
    # Text projection and scoring
    "project",
    "inner_text",
    "count_words",
    "score",
    # Location
    "DEFAULT_STRATEGIES",
    "PatternBuildError",
    "find_exact",
    "find_whitespace_normalized",
    "find_heading",
    "find_block",
    "find_sentence_fragment",
    "find_chunk_boundary",
    "FragmentLocator",
    "locate",
    # Patching
    "SpanMismatchError",
    "apply_patch",
    "scrub",
    "PatchEngine",
    "apply_one",
    "apply_batch",
]
