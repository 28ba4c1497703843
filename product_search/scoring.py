"""Weighted substring relevance between a keyword set and one product."""

from __future__ import annotations

from typing import Iterable

from product_search.models import Product

TITLE_WEIGHT = 3
CATEGORY_WEIGHT = 2
TAG_WEIGHT = 2
# Any category text at all beats scoring nothing.
CATEGORY_RESCUE_SCORE = 1


def score_product(keywords: Iterable[str], product: Product) -> int:
    """
    Sum per keyword: +3 title, +2 categories, +2 tags (case-insensitive substring).
    A zero total is rescued to 1 when the product has category text.
    """
    title = product.name.lower()
    cats = product.category_text.lower()
    tags = product.tag_text.lower()

    score = 0
    for kw in keywords:
        kw = kw.lower()
        if not kw:
            continue
        if kw in title:
            score += TITLE_WEIGHT
        if kw in cats:
            score += CATEGORY_WEIGHT
        if kw in tags:
            score += TAG_WEIGHT

    if score == 0 and cats:
        score = CATEGORY_RESCUE_SCORE
    return score
