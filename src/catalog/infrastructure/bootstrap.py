"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. ``build_container`` is
called once per process and the result is passed around explicitly;
there is no global registry.
"""

from __future__ import annotations

from dataclasses import dataclass

from catalog.application.add_product import AddProductHandler
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.get_product import GetProductByIdHandler
from catalog.application.get_related_products import GetRelatedProductsHandler
from catalog.application.product_service import ProductService
from catalog.application.search_products import SearchProductsHandler
from catalog.application.update_product import UpdateProductHandler
from catalog.infrastructure.config import CatalogSettings
from catalog.infrastructure.persistence.file_store import JsonFileStore
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@dataclass(frozen=True)
class Container:
    settings: CatalogSettings
    file_store: JsonFileStore
    product_repository: JsonProductRepository
    get_product: GetProductByIdHandler
    search_products: SearchProductsHandler
    related_products: GetRelatedProductsHandler
    product_service: ProductService
    add_product: AddProductHandler
    update_product: UpdateProductHandler
    delete_product: DeleteProductHandler


def build_container(settings: CatalogSettings) -> Container:
    file_store = JsonFileStore(settings.data_dir)
    repository = JsonProductRepository(file_store, filename=settings.products_file)

    get_product = GetProductByIdHandler(repository)
    search_products = SearchProductsHandler(
        repository,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
    related_products = GetRelatedProductsHandler(
        get_product, search_products, max_limit=settings.max_related_limit
    )

    return Container(
        settings=settings,
        file_store=file_store,
        product_repository=repository,
        get_product=get_product,
        search_products=search_products,
        related_products=related_products,
        product_service=ProductService(get_product, search_products, related_products),
        add_product=AddProductHandler(repository),
        update_product=UpdateProductHandler(repository),
        delete_product=DeleteProductHandler(repository),
    )
