"""Abstract repository for the Product entity.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory)
live in the infrastructure layer and in the test fakes.

Every method is a coroutine: implementations suspend at I/O boundaries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import ProductId


class ProductRepository(ABC):

    @abstractmethod
    async def find_by_id(self, product_id: ProductId) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    async def find_by_category(
        self,
        category_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Product]:
        """Return products in a category, most recently updated first."""

    @abstractmethod
    async def find_all(
        self, limit: int | None = None, offset: int = 0
    ) -> list[Product]:
        """Return every product, most recently updated first."""

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """Insert or replace a product and return it."""

    @abstractmethod
    async def delete(self, product_id: ProductId) -> None:
        """Remove a product; raises ProductNotFoundError if absent."""

    @abstractmethod
    async def exists(self, product_id: ProductId) -> bool:
        """Return True if a product with this ID is stored."""
