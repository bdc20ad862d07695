"""Data Transfer Objects: plain containers that cross layer boundaries.

``SearchParams`` and ``SearchResult`` travel between the outer layer and
the use cases. The ``*DTO`` classes are what the outer layer renders; they
never expose domain objects.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from catalog.domain.model.product import Product


@dataclass(frozen=True)
class SearchParams:
    """Input: optional category filter plus pagination."""

    category_id: str | None = None
    limit: int | None = None
    offset: int | None = None


@dataclass(frozen=True)
class SearchResult:
    """Output of the search use case: one page of available products.

    ``next_offset`` is the repository position the following page starts
    from, or None when there is no following page.
    """

    products: list[Product]
    limit: int
    offset: int
    has_more: bool
    next_offset: int | None = None


@dataclass(frozen=True)
class PriceDTO:
    amount: float
    currency: str
    original_amount: float | None = None
    discount_percentage: int = 0
    formatted: str = ""


@dataclass(frozen=True)
class StockDTO:
    quantity: int
    is_available: bool


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    title: str
    description: str
    price: PriceDTO
    category_id: str
    status: str
    stock: StockDTO
    created_at: str  # ISO-8601, UTC
    updated_at: str
    is_available: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PaginationDTO:
    limit: int
    offset: int
    has_more: bool
    next_offset: int | None = None


@dataclass(frozen=True)
class SearchResponseDTO:
    """Output: a page of products plus pagination metadata."""

    products: list[ProductDTO]
    pagination: PaginationDTO

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
