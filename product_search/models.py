"""Catalog product model and response models for image_product_search.schema.json."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

KeywordSource = Literal["external", "vocabulary", "none"]

# Statuses a catalog lists when no explicit status filter is given (trash excluded).
LISTABLE_STATUSES = frozenset({"publish", "draft", "pending", "private"})


class Product(BaseModel):
    """Catalog product as seen by the search core (read-only)."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = ""
    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    image_id: Optional[str] = None
    image_urls: dict[str, str] = Field(default_factory=dict, description="Rendition name -> URL")
    permalink: str = ""
    published_at: datetime
    status: str = "publish"

    @property
    def category_text(self) -> str:
        return ", ".join(c for c in self.categories if c)

    @property
    def tag_text(self) -> str:
        return ", ".join(t for t in self.tags if t)

    @property
    def has_image(self) -> bool:
        return bool(self.image_id)

    def image_url(self, size: str = "medium") -> str:
        """URL of the given rendition; falls back to the full-size image."""
        return self.image_urls.get(size) or self.image_urls.get("full") or ""


class ResultItem(BaseModel):
    """One product in the search response. exact is reserved and always false."""
    model_config = ConfigDict(frozen=True)

    title: str
    image: str
    link: str
    exact: bool = False


class SearchResponse(BaseModel):
    """Response matching contracts/image_product_search.schema.json."""
    products: list[ResultItem] = Field(default_factory=list, max_length=6)
