"""Application service: Search Products use case (query).

Pages are built from *available* products only. The repository is asked
for ``limit + 1`` records at a time; the extra record is what tells us
whether another page exists without a separate count query. Because the
availability filter runs after the fetch, a window can come back short
of available products, so the handler keeps reading windows until it has
``limit + 1`` available products or the repository runs dry.
"""

from __future__ import annotations

import logging

from catalog.application.dto import SearchParams, SearchResult
from catalog.domain.exceptions import InvalidSearchParamsError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class SearchProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._product_repo = product_repo
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def handle(self, params: SearchParams) -> SearchResult:
        self._validate(params)

        limit = self._default_limit if params.limit is None else params.limit
        offset = 0 if params.offset is None else params.offset
        window = limit + 1

        available: list[Product] = []
        next_offset: int | None = None
        cursor = offset

        while len(available) <= limit:
            batch = await self._fetch(params.category_id, window, cursor)
            logger.debug(
                "Search window category=%s offset=%d returned %d products",
                params.category_id,
                cursor,
                len(batch),
            )
            for position, product in enumerate(batch, start=cursor):
                if not product.is_available():
                    continue
                available.append(product)
                if len(available) == limit:
                    next_offset = position + 1
                if len(available) > limit:
                    break
            cursor += len(batch)
            if len(batch) < window:
                break

        has_more = len(available) > limit
        return SearchResult(
            products=available[:limit],
            limit=limit,
            offset=offset,
            has_more=has_more,
            next_offset=next_offset if has_more else None,
        )

    async def _fetch(
        self, category_id: str | None, limit: int, offset: int
    ) -> list[Product]:
        if category_id:
            return await self._product_repo.find_by_category(category_id, limit, offset)
        return await self._product_repo.find_all(limit, offset)

    def _validate(self, params: SearchParams) -> None:
        if params.limit is not None and not 1 <= params.limit <= self._max_limit:
            raise InvalidSearchParamsError(
                f"Limit must be between 1 and {self._max_limit}"
            )
        if params.offset is not None and params.offset < 0:
            raise InvalidSearchParamsError(
                "Offset must be greater than or equal to 0"
            )
