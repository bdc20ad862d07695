"""JSON-file-backed implementation of ProductRepository.

The repository keeps every product in an in-memory cache keyed by id.
The cache is hydrated in full from the file store the first time an
operation finds it empty, and every mutation rewrites the whole file
(O(n) per single-record change; fine for a catalog of this size).
"""

from __future__ import annotations

import asyncio
import logging

from catalog.domain.exceptions import (
    DataIntegrityError,
    MappingError,
    ProductNotFoundError,
    RepositoryError,
)
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductId
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.file_store import (
    FileOperationError,
    JsonFileStore,
)
from catalog.infrastructure.persistence.product_mapper import ProductRecordMapper

logger = logging.getLogger(__name__)

PRODUCTS_FILE = "products.json"


class JsonProductRepository(ProductRepository):

    def __init__(self, file_store: JsonFileStore, filename: str = PRODUCTS_FILE) -> None:
        self._file_store = file_store
        self._filename = filename
        self._cache: dict[str, Product] = {}
        # Guards hydrate and mutate/persist sequences against interleaving.
        self._lock = asyncio.Lock()

    # --- ProductRepository interface ------------------------------------------

    async def find_by_id(self, product_id: ProductId) -> Product | None:
        async with self._guard(f"Error finding product by ID {product_id}"):
            await self._ensure_cache()
            return self._cache.get(str(product_id))

    async def find_by_category(
        self,
        category_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Product]:
        async with self._guard(f"Error finding products by category {category_id}"):
            await self._ensure_cache()
            matches = [p for p in self._cache.values() if p.category_id == category_id]
            return self._page(matches, limit, offset)

    async def find_all(
        self, limit: int | None = None, offset: int = 0
    ) -> list[Product]:
        async with self._guard("Error finding all products"):
            await self._ensure_cache()
            return self._page(list(self._cache.values()), limit, offset)

    async def save(self, product: Product) -> Product:
        async with self._guard(f"Error saving product {product.id}"):
            await self._ensure_cache()
            await self._file_store.backup(self._filename)
            self._cache[str(product.id)] = product
            await self._persist()
        logger.info("Saved product %s", product.id)
        return product

    async def delete(self, product_id: ProductId) -> None:
        async with self._guard(f"Error deleting product {product_id}"):
            await self._ensure_cache()
            if str(product_id) not in self._cache:
                raise ProductNotFoundError(str(product_id), context="delete")
            await self._file_store.backup(self._filename)
            del self._cache[str(product_id)]
            await self._persist()
        logger.info("Deleted product %s", product_id)

    async def exists(self, product_id: ProductId) -> bool:
        async with self._guard(f"Error checking if product {product_id} exists"):
            await self._ensure_cache()
            return str(product_id) in self._cache

    def clear_cache(self) -> None:
        """Drop every cached product; the next operation reloads the file."""
        self._cache.clear()

    # --- Cache helpers --------------------------------------------------------

    def _guard(self, message: str) -> _Guarded:
        return _Guarded(self._lock, message)

    async def _ensure_cache(self) -> None:
        # An empty catalog reloads on every call; the read is idempotent.
        if not self._cache:
            await self._load()

    async def _load(self) -> None:
        try:
            records = await self._file_store.read(self._filename)
        except FileOperationError as exc:
            raise DataIntegrityError(
                f"Error loading products from file: {exc}"
            ) from exc

        self._cache.clear()
        skipped = 0
        for record in records:
            if not ProductRecordMapper.validate(record):
                skipped += 1
                logger.warning("Skipping structurally invalid product record: %r", record)
                continue
            try:
                product = ProductRecordMapper.to_domain(record)
            except MappingError as exc:
                skipped += 1
                logger.warning("Skipping product record %s: %s", record.get("id"), exc)
                continue
            self._cache[str(product.id)] = product

        logger.info(
            "Loaded %d products from %s (%d skipped)",
            len(self._cache),
            self._filename,
            skipped,
        )

    async def _persist(self) -> None:
        records = [ProductRecordMapper.to_record(p) for p in self._cache.values()]
        await self._file_store.write(self._filename, records)

    @staticmethod
    def _page(products: list[Product], limit: int | None, offset: int) -> list[Product]:
        ordered = sorted(products, key=lambda p: p.updated_at, reverse=True)
        end = None if limit is None else offset + limit
        return ordered[offset:end]


class _Guarded:
    """Hold the repository lock and wrap unexpected failures.

    ProductNotFoundError and RepositoryError (including DataIntegrityError)
    pass through untouched; anything else becomes a RepositoryError with
    *message*, chaining the original.
    """

    def __init__(self, lock: asyncio.Lock, message: str) -> None:
        self._lock = lock
        self._message = message

    async def __aenter__(self) -> None:
        await self._lock.acquire()

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._lock.release()
        if exc is None or isinstance(exc, (ProductNotFoundError, RepositoryError)):
            return False
        if isinstance(exc, Exception):
            raise RepositoryError(f"{self._message}: {exc}") from exc
        return False
