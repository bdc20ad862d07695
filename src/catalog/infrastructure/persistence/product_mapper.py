"""Translation between Product and the plain record stored in products.json.

Record shape::

    {
      "id": "MLA123456",
      "title": "...",
      "description": "...",
      "price": {"amount": 80.0, "currency": "ARS", "originalAmount": 100.0},
      "categoryId": "CAT_ELECTRONICS_PHONES",
      "status": "active",
      "availableQuantity": 12,
      "createdAt": "2024-01-15T10:30:00.000Z",
      "updatedAt": "2024-01-20T08:00:00.000Z"
    }

``originalAmount`` is omitted, not null, when the price has no discount base.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from catalog.domain.exceptions import DomainException, MappingError
from catalog.domain.model.product import Product, format_timestamp
from catalog.domain.model.value_objects import (
    Price,
    ProductId,
    ProductStatus,
    ProductStock,
)

_STRING_FIELDS = (
    "id",
    "title",
    "description",
    "categoryId",
    "status",
    "createdAt",
    "updatedAt",
)


class ProductRecordMapper:

    @staticmethod
    def to_domain(record: dict[str, Any]) -> Product:
        try:
            price = record["price"]
            return Product(
                id=ProductId.from_string(record["id"]),
                title=record["title"],
                description=record["description"],
                price=Price.of(
                    price["amount"],
                    price["currency"],
                    price.get("originalAmount"),
                ),
                category_id=record["categoryId"],
                status=ProductStatus.from_string(record["status"]),
                stock=ProductStock.from_number(record["availableQuantity"]),
                created_at=_parse_timestamp(record["createdAt"]),
                updated_at=_parse_timestamp(record["updatedAt"]),
            )
        except (DomainException, ArithmeticError, KeyError, TypeError, ValueError) as exc:
            raise MappingError(f"Error mapping product from record: {exc}") from exc

    @staticmethod
    def to_record(product: Product) -> dict[str, Any]:
        price: dict[str, Any] = {
            "amount": _to_number(product.price.amount),
            "currency": product.price.currency,
        }
        if product.price.original_amount is not None:
            price["originalAmount"] = _to_number(product.price.original_amount)

        return {
            "id": str(product.id),
            "title": product.title,
            "description": product.description,
            "price": price,
            "categoryId": product.category_id,
            "status": product.status.value,
            "availableQuantity": product.stock.value,
            "createdAt": format_timestamp(product.created_at),
            "updatedAt": format_timestamp(product.updated_at),
        }

    @staticmethod
    def validate(raw: Any) -> bool:
        """Structural check run before ``to_domain``.

        Numbers must be finite: ``json`` accepts ``NaN`` and ``Infinity``.
        """
        if not isinstance(raw, dict):
            return False
        if not all(isinstance(raw.get(name), str) for name in _STRING_FIELDS):
            return False
        price = raw.get("price")
        if not isinstance(price, dict):
            return False
        original = price.get("originalAmount")
        return (
            _is_number(price.get("amount"))
            and isinstance(price.get("currency"), str)
            and (original is None or _is_number(original))
            and _is_number(raw.get("availableQuantity"))
        )


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _to_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, int)
