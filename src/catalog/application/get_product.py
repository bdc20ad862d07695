"""Application service: Get Product By ID use case (query)."""

from __future__ import annotations

from catalog.domain.exceptions import ProductNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductId
from catalog.domain.repository.product_repository import ProductRepository


class GetProductByIdHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    async def handle(self, product_id: str) -> Product:
        """Return the product, or raise ProductNotFoundError.

        A malformed identifier raises ValidationError before the
        repository is consulted.
        """
        product = await self._product_repo.find_by_id(ProductId.from_string(product_id))
        if product is None:
            raise ProductNotFoundError(product_id, context="lookup")
        return product
