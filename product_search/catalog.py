"""
Read-only catalog access. Catalog is the protocol the search core scans;
InMemoryCatalog backs it with a product list loaded from a JSON file.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol

from pydantic import ValidationError

from product_search import logging_utils as logging_utils_module
from product_search.config import SearchConfig
from product_search.models import LISTABLE_STATUSES, Product


class Catalog(Protocol):
    """Catalog read interface: bounded pages of products in scan order."""

    def list_products(
        self,
        limit: int,
        status: Optional[str] = None,
        newest_first: bool = False,
    ) -> list[Product]:
        """Return up to limit products; status=None means every listable status."""
        ...


class InMemoryCatalog:
    """Catalog over a fixed product list; insertion order is scan order."""

    def __init__(self, products: Iterable[Product]) -> None:
        self._products = list(products)

    def __len__(self) -> int:
        return len(self._products)

    def list_products(
        self,
        limit: int,
        status: Optional[str] = None,
        newest_first: bool = False,
    ) -> list[Product]:
        if status is None:
            items = [p for p in self._products if p.status in LISTABLE_STATUSES]
        else:
            items = [p for p in self._products if p.status == status]
        if newest_first:
            items = sorted(items, key=lambda p: p.published_at, reverse=True)
        return items[: max(limit, 0)]


def read_page(
    catalog: Catalog,
    limit: int,
    status: Optional[str] = None,
    newest_first: bool = False,
) -> list[Product] | None:
    """One bounded catalog read; None when the read fails."""
    try:
        return list(catalog.list_products(limit, status=status, newest_first=newest_first))
    except Exception as e:
        logging_utils_module.log_event(
            "catalog_read_failed", limit=limit, status=status, reason=str(e)
        )
        return None


def _product_rows(raw: Any) -> list[Any]:
    if isinstance(raw, dict):
        raw = raw.get("products")
    if not isinstance(raw, list):
        raise ValueError("Catalog JSON must be a list or an object with a 'products' list")
    return raw


def load_catalog(path: str | Path) -> InMemoryCatalog:
    """Load a JSON catalog file. Raises OSError, ValueError or ValidationError on bad input."""
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    products = [Product.model_validate(row) for row in _product_rows(raw)]
    return InMemoryCatalog(products)


def get_catalog(config: SearchConfig) -> InMemoryCatalog | None:
    """Catalog from CATALOG_PATH, or None when unset or unreadable."""
    if not config.catalog_path:
        return None
    try:
        return load_catalog(config.catalog_path)
    except (OSError, ValueError, ValidationError) as e:
        logging_utils_module.log_event(
            "catalog_unavailable", path=config.catalog_path, reason=str(e)
        )
        return None
