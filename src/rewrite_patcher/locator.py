"""
Fragment locator.

Runs an ordered chain of strategies against the current document and
returns the first match. New strategies can be added or reordered by
passing a different chain; call sites only ever see ``locate``.
"""

import logging
from typing import Optional, Sequence

from .config import DEFAULT_CONFIG, PatchConfig
from .models import Fragment, MatchResult
from .strategies import DEFAULT_STRATEGIES, PatternBuildError, Strategy

logger = logging.getLogger(__name__)


class FragmentLocator:
    """
    Locates fragments inside a document with a strategy chain.

    Example:
        locator = FragmentLocator()
        match = locator.locate(html, Fragment("Old text", "New text"))
    """

    def __init__(
        self,
        strategies: Optional[Sequence[Strategy]] = None,
        config: Optional[PatchConfig] = None,
    ):
        """
        Initialize the locator.

        Args:
            strategies: Ordered strategies. Defaults to ``DEFAULT_STRATEGIES``.
            config: Thresholds passed to every strategy.
        """
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES
        self.config = config or DEFAULT_CONFIG

    def locate(self, document: str, fragment: Fragment) -> Optional[MatchResult]:
        """
        Find where a fragment sits in the document.

        Args:
            document: Current document string.
            fragment: Fragment whose original text should be located.

        Returns:
            The first strategy's match, or None if every strategy fails.
        """
        if not document or not fragment.original.strip():
            return None

        for strategy in self.strategies:
            try:
                match = strategy(document, fragment, self.config)
            except PatternBuildError as e:
                logger.warning(f"{strategy.__name__} skipped: {e}")
                continue
            if match is not None:
                logger.debug(
                    f"{strategy.__name__} matched [{match.span.start}:{match.span.end}] "
                    f"with confidence {match.confidence:.2f}"
                )
                return match

        logger.debug(f"No strategy located '{fragment.original[:40]}'")
        return None


def locate(
    document: str,
    fragment: Fragment,
    config: Optional[PatchConfig] = None,
) -> Optional[MatchResult]:
    """Locate a fragment with the default strategy chain."""
    return FragmentLocator(config=config).locate(document, fragment)
