"""Pipeline tests for search_by_image. Vision mocked; in-memory catalog."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from product_search.catalog import InMemoryCatalog
from product_search.config import SearchConfig
from product_search.models import Product
from product_search.search import search_by_image

CONFIG = SearchConfig()
BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _product(pid: str, name: str, categories=None, tags=None, image: bool = True, permalink: str | None = None) -> Product:
    return Product(
        id=pid,
        name=name,
        categories=categories or [],
        tags=tags or [],
        image_id=f"img-{pid}" if image else None,
        image_urls={"medium": f"https://cdn.example.com/{pid}-300x300.jpg"} if image else {},
        permalink=permalink or f"https://shop.example.com/p/{pid}",
        published_at=BASE + timedelta(days=int(pid.lstrip("p") or 0)),
    )


@patch("product_search.search.keywords_module.resolve_keywords")
def test_no_image_returns_empty_without_scanning(mock_resolve: MagicMock) -> None:
    """No upload -> empty products, no keyword resolution, no catalog read."""
    catalog = MagicMock()
    outcome = search_by_image(None, catalog, CONFIG)
    assert outcome.response.model_dump() == {"products": []}
    mock_resolve.assert_not_called()
    catalog.list_products.assert_not_called()


@patch("product_search.keywords.vision_module.resolve_external_keywords", return_value=["shoe"])
def test_external_keywords_drive_scoring(mock_external: MagicMock) -> None:
    catalog = InMemoryCatalog([
        _product("p1", "Leather Wallet", tags=["gift"]),
        _product("p2", "Red Running Shoe", categories=["Shoes"], tags=["sport"]),
    ])
    outcome = search_by_image(b"img", catalog, CONFIG)
    assert outcome.keyword_source == "external"
    assert outcome.keywords == ["shoe"]
    assert outcome.fallback_used is False
    assert [p.title for p in outcome.response.products] == ["Red Running Shoe"]


def test_vocabulary_path_without_vision_key() -> None:
    """No API key -> vocabulary keywords; matching products returned with images only."""
    catalog = InMemoryCatalog([
        _product("p1", "Canvas Tote Bag", categories=["Bags"]),
        _product("p2", "Canvas Backpack", categories=["Bags"], image=False),
    ])
    outcome = search_by_image(b"img", catalog, CONFIG)
    assert outcome.keyword_source == "vocabulary"
    assert outcome.keywords[0] == "canvas"
    assert [p.title for p in outcome.response.products] == ["Canvas Tote Bag"]


@patch("product_search.keywords.vision_module.resolve_external_keywords", return_value=["bag"])
def test_same_link_returned_once(mock_external: MagicMock) -> None:
    """Two catalog entries sharing a permalink -> one result."""
    shared = "https://shop.example.com/p/tote"
    catalog = InMemoryCatalog([
        _product("p1", "Tote Bag", permalink=shared),
        _product("p2", "Tote Bag (variant)", permalink=shared),
        _product("p3", "Gym Bag"),
    ])
    outcome = search_by_image(b"img", catalog, CONFIG)
    links = [p.link for p in outcome.response.products]
    assert links == [shared, "https://shop.example.com/p/p3"]


@patch("product_search.keywords.vision_module.resolve_external_keywords", return_value=["bag"])
def test_response_capped_at_six(mock_external: MagicMock) -> None:
    catalog = InMemoryCatalog([_product(f"p{n}", f"Bag {n}") for n in range(1, 11)])
    outcome = search_by_image(b"img", catalog, CONFIG)
    assert len(outcome.response.products) == 6
    assert [p.title for p in outcome.response.products] == [f"Bag {n}" for n in range(1, 7)]


@patch("product_search.keywords.vision_module.resolve_external_keywords", return_value=["xyz"])
def test_no_displayable_products_is_empty(mock_external: MagicMock) -> None:
    catalog = InMemoryCatalog([_product("p1", "Red Shoe", categories=["Shoes"], image=False)])
    outcome = search_by_image(b"img", catalog, CONFIG)
    assert outcome.response.products == []
    assert outcome.fallback_used is True


@patch("product_search.keywords.vision_module.resolve_external_keywords", return_value=["xyz"])
def test_recency_fallback_when_nothing_scores(mock_external: MagicMock) -> None:
    catalog = InMemoryCatalog([_product("p1", "Leather Wallet"), _product("p2", "Silk Scarf")])
    outcome = search_by_image(b"img", catalog, CONFIG)
    assert outcome.fallback_used is True
    assert [p.title for p in outcome.response.products] == ["Silk Scarf", "Leather Wallet"]


def test_no_catalog_returns_empty() -> None:
    outcome = search_by_image(b"img", None, CONFIG)
    assert outcome.response.products == []
    assert outcome.keyword_source == "none"


@patch("product_search.vision._get_client")
def test_undecodable_vision_reply_falls_back_to_vocabulary(mock_get_client: MagicMock) -> None:
    """A vision reply too deeply nested to decode still ends on the vocabulary path."""
    client = MagicMock()
    client.chat.completions.create.return_value = MagicMock(
        choices=[MagicMock(message=MagicMock(content='{"keywords":' + "[" * 100000))]
    )
    mock_get_client.return_value = client
    catalog = InMemoryCatalog([_product("p1", "Canvas Tote Bag", categories=["Bags"])])

    outcome = search_by_image(b"img", catalog, SearchConfig(openai_api_key="sk-test"))

    assert outcome.keyword_source == "vocabulary"
    assert [p.title for p in outcome.response.products] == ["Canvas Tote Bag"]
