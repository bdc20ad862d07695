"""Application service: Related Products use case (query).

"Related" means other available products in the same category as the
source product, most recently updated first.
"""

from __future__ import annotations

from catalog.application.dto import SearchParams, SearchResult
from catalog.application.get_product import GetProductByIdHandler
from catalog.application.search_products import SearchProductsHandler
from catalog.domain.exceptions import InvalidSearchParamsError

DEFAULT_RELATED_LIMIT = 4
MAX_RELATED_LIMIT = 20


class GetRelatedProductsHandler:

    def __init__(
        self,
        get_product: GetProductByIdHandler,
        search_products: SearchProductsHandler,
        max_limit: int = MAX_RELATED_LIMIT,
    ) -> None:
        self._get_product = get_product
        self._search_products = search_products
        self._max_limit = max_limit

    async def handle(
        self, product_id: str, limit: int = DEFAULT_RELATED_LIMIT
    ) -> SearchResult:
        if not 1 <= limit <= self._max_limit:
            raise InvalidSearchParamsError(
                f"Limit must be between 1 and {self._max_limit}"
            )

        source = await self._get_product.handle(product_id)

        # One extra slot in case the source itself is in the page.
        result = await self._search_products.handle(
            SearchParams(category_id=source.category_id, limit=limit + 1)
        )
        related = [p for p in result.products if p.id != source.id]

        return SearchResult(
            products=related[:limit],
            limit=limit,
            offset=0,
            has_more=result.has_more or len(related) > limit,
        )
