"""Application service: Add Product use case."""

from __future__ import annotations

from datetime import datetime, timezone

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import (
    Price,
    ProductId,
    ProductStatus,
    ProductStock,
)
from catalog.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(
        self,
        title: str,
        description: str,
        amount: str,
        currency: str,
        category_id: str,
        quantity: int,
        status: str = "active",
        original_amount: str | None = None,
    ) -> Product:
        """Add a new product to the catalog under a freshly generated ID."""
        if not title or not title.strip():
            raise ValidationError("Product title is required")
        if not category_id or not category_id.strip():
            raise ValidationError("Category ID is required")

        now = datetime.now(timezone.utc)
        product = Product(
            id=ProductId.generate(),
            title=title.strip(),
            description=description,
            price=Price.of(amount, currency, original_amount),
            category_id=category_id.strip(),
            status=ProductStatus.from_string(status),
            stock=ProductStock(quantity),
            created_at=now,
            updated_at=now,
        )
        return await self._product_repo.save(product)
