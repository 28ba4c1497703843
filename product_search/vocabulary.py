"""Fallback keyword vocabulary mined from catalog names, categories and tags."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable

from product_search.catalog import Catalog, read_page
from product_search.models import Product

VOCABULARY_PAGE_SIZE = 100
VOCABULARY_SIZE = 20
MIN_TOKEN_LENGTH = 3
DEFAULT_VOCABULARY = ("shirt", "shoe", "bag", "dress", "watch", "phone")

_NUMERIC_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def _is_numeric(token: str) -> bool:
    return bool(_NUMERIC_RE.match(token))


def _tokens(text: str) -> list[str]:
    return [
        token
        for token in text.lower().split()
        if len(token) >= MIN_TOKEN_LENGTH and not _is_numeric(token)
    ]


def product_tokens(product: Product) -> list[str]:
    """Retained tokens of one product: name, then each category label, then each tag label."""
    # One label at a time; the ", "-joined text is for display and scoring only.
    tokens = _tokens(product.name)
    for label in [*product.categories, *product.tags]:
        tokens.extend(_tokens(label))
    return tokens


def rank_vocabulary(products: Iterable[Product], size: int = VOCABULARY_SIZE) -> list[str]:
    """
    Count retained tokens over all products; most frequent first, ties in
    first-encountered order. Default vocabulary when nothing is retained.
    """
    counts: Counter[str] = Counter()
    for product in products:
        counts.update(product_tokens(product))
    if not counts:
        return list(DEFAULT_VOCABULARY)
    # sorted() is stable and Counter keeps insertion order.
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [token for token, _ in ranked[:size]]


def extract_vocabulary(catalog: Catalog | None) -> list[str]:
    """Fallback keyword set from up to 100 published products; [] when the catalog is unavailable."""
    if catalog is None:
        return []
    products = read_page(catalog, limit=VOCABULARY_PAGE_SIZE, status="publish")
    if products is None:
        return []
    return rank_vocabulary(products)
