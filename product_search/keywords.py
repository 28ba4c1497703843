"""Keyword resolution: vision keywords when available, else the catalog vocabulary."""

from __future__ import annotations

from product_search import vision as vision_module
from product_search import vocabulary as vocabulary_module
from product_search.catalog import Catalog
from product_search.config import SearchConfig
from product_search.models import KeywordSource
from product_search.vision import ImageSource


def resolve_keywords(
    image: ImageSource,
    catalog: Catalog | None,
    config: SearchConfig,
) -> tuple[list[str], KeywordSource]:
    """Return (keyword set, source). Empty only when neither vision nor catalog is available."""
    external = vision_module.resolve_external_keywords(image, config)
    if external:
        return external, "external"
    fallback = vocabulary_module.extract_vocabulary(catalog)
    if fallback:
        return fallback, "vocabulary"
    return [], "none"
