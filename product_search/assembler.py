"""
Result assembly: score a bounded catalog page, keep displayable positive
matches, fall back to the most recent products, then dedupe by link and cap.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from product_search.catalog import Catalog, read_page
from product_search.models import Product, ResultItem
from product_search.scoring import score_product

SCAN_PAGE_SIZE = 120
FALLBACK_PAGE_SIZE = 6
MAX_RESULTS = 6
IMAGE_SIZE = "medium"


def to_result_item(product: Product) -> ResultItem:
    """Copy display fields off the product; exact is reserved and stays false."""
    return ResultItem(
        title=product.name,
        image=product.image_url(IMAGE_SIZE),
        link=product.permalink,
        exact=False,
    )


def scan_scored(keywords: Sequence[str], products: Iterable[Product]) -> list[ResultItem]:
    """Products with score > 0 and an image, in scan order."""
    results: list[ResultItem] = []
    added: set[str] = set()
    for product in products:
        if product.id in added:
            continue
        if score_product(keywords, product) <= 0:
            continue
        if not product.has_image:
            continue
        results.append(to_result_item(product))
        added.add(product.id)
    return results


def scan_recent(products: Iterable[Product]) -> list[ResultItem]:
    """Every product with an image, in the given (recency) order; scores ignored."""
    return [to_result_item(p) for p in products if p.has_image]


def assemble_results(
    keywords: Sequence[str],
    catalog: Catalog | None,
) -> tuple[list[ResultItem], bool]:
    """
    Candidate list before final dedup, plus whether the recency fallback ran.
    No catalog yields ([], False).
    """
    if catalog is None:
        return [], False
    page = read_page(catalog, limit=SCAN_PAGE_SIZE, status="publish") or []
    results = scan_scored(keywords, page)
    if results:
        return results, False
    recent = read_page(catalog, limit=FALLBACK_PAGE_SIZE, status=None, newest_first=True) or []
    return scan_recent(recent), True


def dedupe_and_truncate(items: Iterable[ResultItem], limit: int = MAX_RESULTS) -> list[ResultItem]:
    """First occurrence of each link wins; then cap at limit."""
    seen: set[str] = set()
    unique: list[ResultItem] = []
    for item in items:
        if item.link in seen:
            continue
        seen.add(item.link)
        unique.append(item)
    return unique[:limit]
