"""One image search request: keywords -> scored scan -> fallback -> dedup."""

from __future__ import annotations

from dataclasses import dataclass, field

from product_search import assembler as assembler_module
from product_search import keywords as keywords_module
from product_search.catalog import Catalog
from product_search.config import SearchConfig
from product_search.models import KeywordSource, ResultItem, SearchResponse
from product_search.vision import ImageSource


@dataclass
class SearchOutcome:
    """Response plus request diagnostics for logging and metrics."""
    response: SearchResponse
    keywords: list[str] = field(default_factory=list)
    keyword_source: KeywordSource = "none"
    fallback_used: bool = False


def search_by_image(
    image: ImageSource | None,
    catalog: Catalog | None,
    config: SearchConfig,
) -> SearchOutcome:
    """Run the pipeline. No image means an empty response without touching the catalog."""
    if image is None:
        return SearchOutcome(response=SearchResponse(products=[]))

    keywords, source = keywords_module.resolve_keywords(image, catalog, config)
    candidates, fallback_used = assembler_module.assemble_results(keywords, catalog)
    products: list[ResultItem] = assembler_module.dedupe_and_truncate(candidates)
    return SearchOutcome(
        response=SearchResponse(products=products),
        keywords=keywords,
        keyword_source=source,
        fallback_used=fallback_used,
    )
