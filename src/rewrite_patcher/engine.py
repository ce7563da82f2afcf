"""
Patch engine: single and batch application of rewrite fragments.

This is the entry point used by the editor state layer:
- ``apply_one``: locate one fragment, patch it in, scrub duplicates
- ``apply_batch``: fold a list of fragments through the same steps, each
  one locating against the document left by the previous ones

No exception escapes either call. A fragment that cannot be located, or
whose patch cannot be applied safely, leaves the document unchanged and is
reported as a failure.
"""

import logging
from typing import Optional, Sequence, Union

from .applier import apply_patch
from .config import DEFAULT_CONFIG, PatchConfig
from .duplication import scrub
from .locator import FragmentLocator
from .models import BatchOutcome, Fragment, FragmentReport, PatchOutcome
from .strategies import Strategy

logger = logging.getLogger(__name__)

FragmentInput = Union[Fragment, dict]


def _as_fragment(fragment: FragmentInput) -> Fragment:
    if isinstance(fragment, Fragment):
        return fragment
    return Fragment.from_dict(fragment)


class PatchEngine:
    """
    Applies rewrite fragments to HTML documents.

    Holds no document state between calls; the same engine can be reused
    for any number of documents.

    Example:
        engine = PatchEngine(PatchConfig.strict())
        outcome = engine.apply_batch(html, suggestions)
    """

    def __init__(
        self,
        config: Optional[PatchConfig] = None,
        strategies: Optional[Sequence[Strategy]] = None,
    ):
        """
        Initialize the engine.

        Args:
            config: Thresholds for matching and scrubbing.
            strategies: Custom strategy chain for the locator.
        """
        self.config = config or DEFAULT_CONFIG
        self.locator = FragmentLocator(strategies=strategies, config=self.config)

    def apply_one(self, document: str, fragment: FragmentInput) -> PatchOutcome:
        """
        Apply a single fragment.

        Args:
            document: Current document string.
            fragment: Fragment object or ``{original, improved, explanation}``.

        Returns:
            PatchOutcome; on failure ``document`` is the input, unchanged.
        """
        try:
            fragment = _as_fragment(fragment)
            match = self.locator.locate(document, fragment)
            if match is None:
                logger.warning(f"Could not find the text to replace: '{fragment.original[:40]}'")
                return PatchOutcome(success=False, document=document, explanation=fragment.explanation)

            updated = apply_patch(document, match, fragment.improved)
            if self.config.scrub_enabled:
                # Replacement ends where the old element ended, shifted by the size change
                patched_end = match.span.outer_end + len(updated) - len(document)
                updated = scrub(
                    updated,
                    fragment.improved,
                    self.config,
                    region=(match.span.outer_start, patched_end),
                )
        except Exception as e:
            logger.error(f"Applying fragment failed: {e}")
            return PatchOutcome(
                success=False,
                document=document,
                explanation=getattr(fragment, "explanation", None),
            )

        logger.info(
            f"Applied fragment with {match.strategy.value} match "
            f"(confidence {match.confidence:.2f})"
        )
        return PatchOutcome(
            success=True,
            document=updated,
            strategy=match.strategy,
            confidence=match.confidence,
            explanation=fragment.explanation,
        )

    def apply_batch(self, document: str, fragments: Sequence[FragmentInput]) -> BatchOutcome:
        """
        Apply fragments strictly in list order.

        Each fragment is located against the document as mutated by the
        fragments before it. Failures are counted and skipped.

        Args:
            document: Starting document string.
            fragments: Fragments to apply.

        Returns:
            BatchOutcome with the final document and per-fragment reports.
        """
        reports = []
        applied = 0
        current = document

        for index, item in enumerate(fragments):
            try:
                fragment = _as_fragment(item)
            except (AttributeError, TypeError) as e:
                logger.error(f"Skipping malformed fragment #{index}: {e}")
                reports.append(FragmentReport(
                    index=index,
                    fragment=Fragment(original="", improved=""),
                    success=False,
                ))
                continue

            outcome = self.apply_one(current, fragment)
            if outcome.success:
                applied += 1
                current = outcome.document
            reports.append(FragmentReport(
                index=index,
                fragment=fragment,
                success=outcome.success,
                strategy=outcome.strategy,
                confidence=outcome.confidence,
            ))

        logger.info(f"Applied {applied} of {len(fragments)} suggestions")
        return BatchOutcome(
            document=current,
            applied_count=applied,
            total=len(fragments),
            reports=reports,
        )


def apply_one(
    document: str,
    fragment: FragmentInput,
    config: Optional[PatchConfig] = None,
) -> PatchOutcome:
    """
    Convenience function to apply one fragment.

    Args:
        document: Current document string.
        fragment: Fragment object or suggestion dict.
        config: Optional thresholds.

    Returns:
        PatchOutcome.
    """
    return PatchEngine(config).apply_one(document, fragment)


def apply_batch(
    document: str,
    fragments: Sequence[FragmentInput],
    config: Optional[PatchConfig] = None,
) -> BatchOutcome:
    """
    Convenience function to apply fragments in order.

    Args:
        document: Starting document string.
        fragments: Fragment objects or suggestion dicts.
        config: Optional thresholds.

    Returns:
        BatchOutcome.
    """
    return PatchEngine(config).apply_batch(document, fragments)
