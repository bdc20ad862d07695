"""Application service: Update Product use case.

Products are immutable, so an update builds a new Product with a fresh
``updated_at`` and saves it under the same ID.
"""

from __future__ import annotations

from typing import Any

from catalog.application.get_product import GetProductByIdHandler
from catalog.domain.exceptions import ValidationError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price, ProductStatus, ProductStock
from catalog.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._get_product = GetProductByIdHandler(product_repo)

    async def handle(
        self,
        product_id: str,
        amount: str | None = None,
        original_amount: str | None = None,
        quantity: int | None = None,
        status: str | None = None,
    ) -> Product:
        product = await self._get_product.handle(product_id)

        changes: dict[str, Any] = {}
        if amount is not None or original_amount is not None:
            current = product.price
            changes["price"] = Price.of(
                current.amount if amount is None else amount,
                current.currency,
                current.original_amount if original_amount is None else original_amount,
            )
        if quantity is not None:
            changes["stock"] = ProductStock(quantity)
        if status is not None:
            changes["status"] = ProductStatus.from_string(status)

        if not changes:
            raise ValidationError("Nothing to update")

        return await self._product_repo.save(product.with_changes(**changes))
