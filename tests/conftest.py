"""
Pytest fixtures and configuration for rewrite patcher tests.
"""

import json
from pathlib import Path

import pytest


@pytest.fixture
def sample_article_html() -> str:
    """Article markup as produced by the rich-text editor."""
    return (
        '<h1 class="title" data-id="7">Content Marketing Basics</h1>'
        "<p>Content marketing helps brands attract customers with useful articles.</p>"
        '<h2 id="why">Why Consistency Matters</h2>'
        "<p>Publishing on a regular schedule builds trust with readers over time.</p>"
        "<ul><li>Plan topics in advance</li><li>Measure engagement every month</li></ul>"
    )


@pytest.fixture
def sample_suggestions() -> list[dict]:
    """Suggestions in the shape returned by the rewrite service."""
    return [
        {
            "original": "Content marketing helps brands attract customers with useful articles.",
            "improved": "Content marketing helps brands win loyal customers with genuinely useful articles.",
            "explanation": "Stronger verb and clearer benefit.",
        },
        {
            "original": "Why Consistency Matters",
            "improved": "Why Publishing Consistency Matters",
            "explanation": "Adds the primary keyword to the heading.",
        },
    ]


@pytest.fixture
def duplicated_paragraph_html() -> str:
    """Paragraph with one repeated six-word sentence and enough other text."""
    return (
        "<p>Our writers research every topic carefully. "
        "Our writers research every topic carefully. "
        "Each draft then goes through two rounds of editing before it is published on the blog.</p>"
    )


@pytest.fixture
def article_file(tmp_path: Path, sample_article_html: str) -> Path:
    """Write the sample article to disk."""
    path = tmp_path / "article.html"
    path.write_text(sample_article_html, encoding="utf-8")
    return path


@pytest.fixture
def suggestions_file(tmp_path: Path, sample_suggestions: list[dict]) -> Path:
    """Write the sample suggestions to disk."""
    path = tmp_path / "suggestions.json"
    path.write_text(json.dumps(sample_suggestions), encoding="utf-8")
    return path
