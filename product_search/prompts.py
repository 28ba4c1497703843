"""Prompt text for keyword extraction; the model must answer with strict JSON."""

from __future__ import annotations

KEYWORDS_INSTRUCTION = (
    'Return JSON only: {"keywords":[]}. '
    "Fill keywords with short lowercase product search terms for the item in the image "
    "(product type, material, colour, style). No prose, no markdown."
)


def get_user_content_keywords() -> str:
    """User message text sent alongside the image."""
    return KEYWORDS_INSTRUCTION
