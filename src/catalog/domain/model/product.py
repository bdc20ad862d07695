"""Product entity.

Products are immutable once built: an "update" is a new Product saved
under the same identifier, which replaces the old one in the repository.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from catalog.domain.model.value_objects import (
    Price,
    ProductId,
    ProductStatus,
    ProductStock,
)


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    ``category_id`` is a plain string; no category registry is consulted.
    """

    id: ProductId
    title: str
    description: str
    price: Price
    category_id: str
    status: ProductStatus
    stock: ProductStock
    created_at: datetime
    updated_at: datetime

    def is_available(self) -> bool:
        """Sellable right now: active and at least one unit in stock."""
        return self.status.is_active and self.stock.is_available

    def has_stock(self, quantity: int = 1) -> bool:
        return self.stock.has_stock(quantity)

    def with_changes(self, **changes: Any) -> Product:
        """Return a copy with *changes* applied and ``updated_at`` refreshed."""
        changes.setdefault("updated_at", datetime.now(timezone.utc))
        return replace(self, **changes)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")
