"""Application service: Delete Product use case."""

from __future__ import annotations

from catalog.domain.model.value_objects import ProductId
from catalog.domain.repository.product_repository import ProductRepository


class DeleteProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str) -> None:
        """Remove a product; raises ProductNotFoundError if it is not stored."""
        await self._product_repo.delete(ProductId.from_string(product_id))
