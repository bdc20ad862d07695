"""Facade the outer layer talks to.

Wraps the three read use cases and shapes their results into DTOs so
callers never touch domain objects.
"""

from __future__ import annotations

from catalog.application.dto import (
    PaginationDTO,
    PriceDTO,
    ProductDTO,
    SearchParams,
    SearchResponseDTO,
    SearchResult,
    StockDTO,
)
from catalog.application.get_product import GetProductByIdHandler
from catalog.application.get_related_products import (
    DEFAULT_RELATED_LIMIT,
    GetRelatedProductsHandler,
)
from catalog.application.search_products import SearchProductsHandler
from catalog.domain.model.product import Product, format_timestamp


class ProductService:

    def __init__(
        self,
        get_product: GetProductByIdHandler,
        search_products: SearchProductsHandler,
        related_products: GetRelatedProductsHandler,
    ) -> None:
        self._get_product = get_product
        self._search_products = search_products
        self._related_products = related_products

    async def get_product_detail(self, product_id: str) -> ProductDTO:
        product = await self._get_product.handle(product_id)
        return self.to_dto(product)

    async def search_products(self, params: SearchParams) -> SearchResponseDTO:
        result = await self._search_products.handle(params)
        return self.to_search_response(result)

    async def get_related_products(
        self, product_id: str, limit: int = DEFAULT_RELATED_LIMIT
    ) -> SearchResponseDTO:
        result = await self._related_products.handle(product_id, limit)
        return self.to_search_response(result)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        price = product.price
        return ProductDTO(
            id=str(product.id),
            title=product.title,
            description=product.description,
            price=PriceDTO(
                amount=float(price.amount),
                currency=price.currency,
                original_amount=(
                    None if price.original_amount is None else float(price.original_amount)
                ),
                discount_percentage=price.discount_percentage,
                formatted=price.format(),
            ),
            category_id=product.category_id,
            status=product.status.value,
            stock=StockDTO(
                quantity=product.stock.value,
                is_available=product.stock.is_available,
            ),
            created_at=format_timestamp(product.created_at),
            updated_at=format_timestamp(product.updated_at),
            is_available=product.is_available(),
        )

    @classmethod
    def to_search_response(cls, result: SearchResult) -> SearchResponseDTO:
        return SearchResponseDTO(
            products=[cls.to_dto(p) for p in result.products],
            pagination=PaginationDTO(
                limit=result.limit,
                offset=result.offset,
                has_more=result.has_more,
                next_offset=result.next_offset,
            ),
        )
