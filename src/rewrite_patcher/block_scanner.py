"""
Block and heading boundary scanner.

Builds a minimal tokenized view of a document: for each block-level or
heading element, its tag name, verbatim open/close tags and inner range.
Tags are tokenized with a single linear regex pass and paired with a
stack, so nested elements of the same name (``<div>`` in ``<div>``) are
bounded correctly and unclosed elements are dropped instead of swallowing
the rest of the document. This is not an HTML parser: anything that is
not a tracked tag is treated as opaque content.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .models import BlockElement

logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

BLOCK_TAGS = ("p", "div", *HEADING_TAGS, "li", "blockquote", "section", "article")

# Blocks usable by the meaningful-word overlap fallback
PARAGRAPH_TAGS = ("p", "div", *HEADING_TAGS, "li", "blockquote")

# Blocks usable by the chunk-boundary fallback
CHUNK_TAGS = ("p", "div", "li", "blockquote", "section", "article")

TAG_TOKEN_PATTERN = re.compile(r"<(/?)([a-zA-Z][a-zA-Z0-9-]*)(\s[^>]*)?>")

TIPTAP_HEADING_PATTERN = re.compile(r"""data-type\s*=\s*['"]heading['"]""", re.IGNORECASE)


@dataclass
class _OpenElement:
    """An open tag waiting for its close tag."""
    name: str
    open_tag: str
    start: int
    inner_start: int
    depth: int
    nested: bool = field(default=False)


def _is_tracked(name: str, open_tag: str) -> bool:
    return name in BLOCK_TAGS or bool(TIPTAP_HEADING_PATTERN.search(open_tag))


def scan_blocks(document: str, tags: Optional[Iterable[str]] = None) -> list[BlockElement]:
    """
    Find block-level elements in a document.

    Args:
        document: HTML document string.
        tags: Tag names to return. Defaults to all block tags. TipTap
            headings (``data-type="heading"``) are always tracked and are
            returned when ``tags`` includes any heading tag.

    Returns:
        Elements ordered by start offset.
    """
    wanted = set(tags) if tags is not None else set(BLOCK_TAGS)
    include_tiptap = bool(wanted & set(HEADING_TAGS))

    stack: list[_OpenElement] = []
    elements: list[BlockElement] = []

    for token in TAG_TOKEN_PATTERN.finditer(document):
        is_close = token.group(1) == "/"
        name = token.group(2).lower()
        raw_tag = token.group(0)

        if not is_close:
            if raw_tag.endswith("/>") or not _is_tracked(name, raw_tag):
                continue
            if stack:
                stack[-1].nested = True
            stack.append(_OpenElement(
                name=name,
                open_tag=raw_tag,
                start=token.start(),
                inner_start=token.end(),
                depth=len(stack),
            ))
            continue

        # Pair with the nearest open element of the same name
        for index in range(len(stack) - 1, -1, -1):
            if stack[index].name == name:
                break
        else:
            continue

        if index < len(stack) - 1:
            logger.debug(
                f"Dropping {len(stack) - 1 - index} unclosed element(s) inside <{name}>"
            )
        opened = stack[index]
        del stack[index:]

        element = BlockElement(
            name=name,
            open_tag=opened.open_tag,
            close_tag=raw_tag,
            start=opened.start,
            inner_start=opened.inner_start,
            inner_end=token.start(),
            end=token.end(),
            depth=opened.depth,
            has_nested_blocks=opened.nested,
        )
        if name in wanted or (include_tiptap and element.is_heading):
            elements.append(element)

    elements.sort(key=lambda e: e.start)
    return elements


def scan_headings(document: str) -> list[BlockElement]:
    """Find h1-h6 and TipTap heading elements."""
    return [e for e in scan_blocks(document, HEADING_TAGS) if e.is_heading]


def leaf_blocks(document: str, tags: Optional[Iterable[str]] = None) -> list[BlockElement]:
    """Find block elements that contain no other block element."""
    return [e for e in scan_blocks(document, tags) if not e.has_nested_blocks]


def innermost_block(
    blocks: list[BlockElement],
    start: int,
    end: int,
) -> Optional[BlockElement]:
    """
    Get the deepest block whose inner range covers ``[start, end)``.

    Args:
        blocks: Candidate elements, e.g. from ``scan_blocks``.
        start: Region start offset.
        end: Region end offset.

    Returns:
        The innermost covering element, or None.
    """
    best = None
    for block in blocks:
        if block.inner_start <= start and end <= block.inner_end:
            if best is None or block.depth > best.depth:
                best = block
    return best
