"""
Data models for the rewrite patcher.

This module defines the core data structures passed between the locator,
the applier, the scrubber and the batch coordinator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .text_projection import count_words


class StrategyId(Enum):
    """Identifiers of the fragment-location strategies, in chain order."""
    EXACT = "exact"
    WHITESPACE = "whitespace"
    HEADING = "heading"
    BLOCK = "block"
    SENTENCE = "sentence"
    CHUNK = "chunk"


@dataclass
class Fragment:
    """One proposed rewrite: an original text and its improved replacement."""
    original: str
    improved: str
    explanation: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Fragment":
        """Build a fragment from a rewrite-service suggestion object."""
        return cls(
            original=data.get("original") or "",
            improved=data.get("improved") or "",
            explanation=data.get("explanation"),
        )


@dataclass
class EnclosingTag:
    """Open/close tag strings of the element a match sits in."""
    name: str
    open_tag: str
    close_tag: str


@dataclass
class Span:
    """
    A located region within the current document string.

    When ``enclosing_tag`` is set, ``[start, end)`` is the element's inner
    range and the tag strings sit immediately around it.
    """
    start: int
    end: int
    enclosing_tag: Optional[EnclosingTag] = None

    @property
    def outer_start(self) -> int:
        """Start of the full element, including its open tag."""
        if self.enclosing_tag is None:
            return self.start
        return self.start - len(self.enclosing_tag.open_tag)

    @property
    def outer_end(self) -> int:
        """End of the full element, including its close tag."""
        if self.enclosing_tag is None:
            return self.end
        return self.end + len(self.enclosing_tag.close_tag)


@dataclass
class MatchResult:
    """A located fragment together with how it was found."""
    span: Span
    strategy: StrategyId
    confidence: float
    replacement: Optional[str] = None  # Overrides fragment.improved when set


@dataclass
class PatchOutcome:
    """Result of applying a single fragment."""
    success: bool
    document: str
    strategy: Optional[StrategyId] = None
    confidence: Optional[float] = None
    explanation: Optional[str] = None

    @property
    def word_count(self) -> int:
        """Word count of the rendered document."""
        return count_words(self.document)


@dataclass
class FragmentReport:
    """Per-fragment line of a batch outcome."""
    index: int
    fragment: Fragment
    success: bool
    strategy: Optional[StrategyId] = None
    confidence: Optional[float] = None


@dataclass
class BatchOutcome:
    """Result of folding a list of fragments through the engine."""
    document: str
    applied_count: int
    total: int
    reports: list[FragmentReport] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        """Number of fragments that could not be located."""
        return self.total - self.applied_count

    @property
    def word_count(self) -> int:
        """Word count of the rendered document."""
        return count_words(self.document)


@dataclass
class BlockElement:
    """
    Boundaries of one block or heading element in a document.

    Offsets index into the document string the element was scanned from:
    ``start`` is the ``<`` of the open tag, ``inner_start``/``inner_end``
    bound the content and ``end`` is one past the close tag's ``>``.
    """
    name: str
    open_tag: str
    close_tag: str
    start: int
    inner_start: int
    inner_end: int
    end: int
    depth: int = 0
    has_nested_blocks: bool = False

    @property
    def is_heading(self) -> bool:
        """Check if the element is a heading (h1-h6 or a TipTap heading)."""
        if self.name in ("h1", "h2", "h3", "h4", "h5", "h6"):
            return True
        return "data-type=\"heading\"" in self.open_tag or "data-type='heading'" in self.open_tag

    def inner_html(self, document: str) -> str:
        """Get the raw markup between the open and close tags."""
        return document[self.inner_start:self.inner_end]

    def contains(self, other: "BlockElement") -> bool:
        """Check if another element is nested inside this one."""
        return self.inner_start <= other.start and other.end <= self.inner_end

    def to_span(self) -> Span:
        """Span over the inner range, with the tags as enclosing tag."""
        return Span(
            start=self.inner_start,
            end=self.inner_end,
            enclosing_tag=EnclosingTag(
                name=self.name,
                open_tag=self.open_tag,
                close_tag=self.close_tag,
            ),
        )
