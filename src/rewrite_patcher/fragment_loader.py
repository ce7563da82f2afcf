"""
Fragment loading from JSON files.

Accepts the payloads produced by the rewrite service:
- A list of ``{original, improved, explanation}`` objects
- An object with the list under ``suggestions``
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .models import Fragment


class FragmentLoadError(Exception):
    """Raised when fragment loading fails."""
    pass


class FragmentInput(BaseModel):
    """Single rewrite suggestion as sent by the rewrite service."""
    original: str = Field(..., min_length=1, description="Text to find in the document")
    improved: str = Field(..., description="Replacement text")
    explanation: Optional[str] = Field(None, description="Why the rewrite was suggested")

    def to_fragment(self) -> Fragment:
        """Convert to the engine's fragment model."""
        return Fragment(
            original=self.original,
            improved=self.improved,
            explanation=self.explanation,
        )


class SuggestionsPayload(BaseModel):
    """Rewrite-service response wrapping a suggestion list."""
    suggestions: list[FragmentInput] = Field(default_factory=list)


def parse_fragments(data: Union[list, dict]) -> list[Fragment]:
    """
    Validate decoded JSON and convert it to fragments.

    Args:
        data: Decoded JSON, either a list or a ``{"suggestions": [...]}`` object.

    Returns:
        Fragments in payload order.

    Raises:
        FragmentLoadError: If the payload does not validate.
    """
    if isinstance(data, list):
        data = {"suggestions": data}
    if not isinstance(data, dict):
        raise FragmentLoadError(
            f"Expected a list of suggestions or an object with 'suggestions', got {type(data).__name__}"
        )

    try:
        payload = SuggestionsPayload.model_validate(data)
    except ValidationError as e:
        raise FragmentLoadError(f"Invalid suggestions: {e}")

    return [item.to_fragment() for item in payload.suggestions]


def load_fragments(file_path: Union[str, Path]) -> list[Fragment]:
    """
    Load fragments from a JSON file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Fragments in file order.

    Raises:
        FragmentLoadError: If the file cannot be read, decoded or validated.
    """
    path = Path(file_path)
    if not path.exists():
        raise FragmentLoadError(f"Fragment file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise FragmentLoadError(f"Failed to read fragment file: {e}")

    return parse_fragments(data)
