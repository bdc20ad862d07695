"""Randomised sample catalog for local development and demos.

Products are drawn from per-category title templates (brand, storage,
colour and similar variants) with a price range per category. Every
product goes through the domain model and ``ProductRecordMapper`` before
it is written, so a generated file always loads back cleanly.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import (
    Price,
    ProductId,
    ProductStatus,
    ProductStock,
)
from catalog.infrastructure.persistence.file_store import JsonFileStore
from catalog.infrastructure.persistence.product_mapper import ProductRecordMapper

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_COUNT = 100
SAMPLE_CURRENCY = "USD"

BRANDS = (
    "Apple", "Samsung", "Sony", "LG", "HP", "Dell", "Lenovo", "Asus",
    "Xiaomi", "Huawei", "OnePlus", "Google", "Microsoft", "Nintendo",
    "PlayStation", "Xbox", "Canon", "Nikon", "JBL", "Bose",
)

DESCRIPTIONS = (
    "Producto de alta calidad con tecnología de punta. Incluye garantía oficial del fabricante.",
    "Excelente relación calidad-precio. Ideal para uso profesional y personal.",
    "Diseño moderno y funcionalidad excepcional. Compatible con los últimos estándares.",
    "Tecnología avanzada con características premium. Fácil de usar y configurar.",
    "Producto confiable con excelente rendimiento. Recomendado por expertos.",
)


@dataclass(frozen=True)
class _Template:
    titles: tuple[str, ...]
    price_range: tuple[int, int]
    variants: dict[str, tuple[str, ...]] = field(default_factory=dict)


_FALLBACK_PRICE_RANGE = (50, 500)

_TEMPLATES: dict[str, _Template] = {
    "CAT_ELECTRONICS_PHONES": _Template(
        titles=(
            "iPhone 15 Pro Max {storage} {color}",
            "Samsung Galaxy S24 Ultra {storage} {color}",
            "Xiaomi 14 Pro {storage} {color}",
            "Google Pixel 8 Pro {storage} {color}",
            "OnePlus 12 {storage} {color}",
        ),
        price_range=(300, 1500),
        variants={
            "storage": ("128GB", "256GB", "512GB", "1TB"),
            "color": ("Negro", "Blanco", "Azul", "Rojo", "Verde", "Titanio Natural", "Dorado"),
        },
    ),
    "CAT_ELECTRONICS_LAPTOPS": _Template(
        titles=(
            'MacBook Pro {size}" M3 {storage} {color}',
            'Dell XPS {size}" Intel i7 {storage}',
            'HP Pavilion {size}" AMD Ryzen 7 {storage}',
            'Lenovo ThinkPad {size}" Intel i5 {storage}',
            'Asus ROG {size}" Gaming {storage}',
        ),
        price_range=(800, 3000),
        variants={
            "size": ("13", "14", "15", "16", "17"),
            "storage": ("256GB", "512GB", "1TB", "2TB"),
            "color": ("Gris Espacial", "Plata", "Negro", "Blanco"),
        },
    ),
    "CAT_ELECTRONICS_AUDIO": _Template(
        titles=(
            "Auriculares {brand} {model} {type}",
            "Parlante {brand} {model} Bluetooth",
            "Audífonos {brand} {model} {type}",
            "Soundbar {brand} {model} {power}W",
        ),
        price_range=(50, 500),
        variants={
            "model": ("Pro", "Max", "Ultra", "Studio", "Elite", "Premium"),
            "type": ("Inalámbricos", "Con Cable", "Noise Cancelling", "Gaming"),
            "power": ("50", "100", "150", "200", "300"),
        },
    ),
}


def _category(category_id: str, name: str, parent: tuple[str, str] | None = None) -> dict[str, Any]:
    record: dict[str, Any] = {"id": category_id, "name": name, "path": []}
    if parent is not None:
        record["path"].append({"id": parent[0], "name": parent[1]})
        record["parentId"] = parent[0]
    record["path"].append({"id": category_id, "name": name})
    return record


_ELECTRONICS = ("CAT_ELECTRONICS", "Electrónicos")

CATEGORIES: tuple[dict[str, Any], ...] = (
    _category(*_ELECTRONICS),
    _category("CAT_ELECTRONICS_PHONES", "Celulares y Smartphones", _ELECTRONICS),
    _category("CAT_ELECTRONICS_LAPTOPS", "Computadoras y Laptops", _ELECTRONICS),
    _category("CAT_ELECTRONICS_AUDIO", "Audio y Sonido", _ELECTRONICS),
    _category("CAT_ELECTRONICS_GAMING", "Videojuegos y Consolas", _ELECTRONICS),
    _category("CAT_ELECTRONICS_TV", "TV y Video", _ELECTRONICS),
    _category("CAT_HOME", "Casa y Jardín"),
    _category("CAT_FASHION", "Ropa y Accesorios"),
    _category("CAT_SPORTS", "Deportes y Fitness"),
)

_CREATED_FROM = datetime(2023, 1, 1, tzinfo=timezone.utc)
_CREATED_UNTIL = datetime(2024, 12, 31, tzinfo=timezone.utc)
_CENTS = Decimal("0.01")


class SampleCatalogGenerator:
    """Builds category records and products from a ``random.Random``.

    Pass a seeded ``Random`` for a reproducible catalog.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def categories(self) -> list[dict[str, Any]]:
        return [dict(c, path=[dict(p) for p in c["path"]]) for c in CATEGORIES]

    def products(self, count: int) -> list[Product]:
        """Products are only placed in leaf categories (those with a parent)."""
        leaves = [c["id"] for c in CATEGORIES if "parentId" in c]
        products: list[Product] = []
        used: set[str] = set()
        for _ in range(count):
            product_id = self._unique_id(used)
            products.append(self._product(product_id, self._rng.choice(leaves)))
        return products

    def _unique_id(self, used: set[str]) -> str:
        while True:
            candidate = f"MLU{self._rng.randint(100_000_000, 999_999_999)}"
            if candidate not in used:
                used.add(candidate)
                return candidate

    def _product(self, product_id: str, category_id: str) -> Product:
        created = self._created_at()
        updated = created + timedelta(seconds=self._rng.uniform(0, 365 * 24 * 3600))
        return Product(
            id=ProductId.from_string(product_id),
            title=self._title(category_id),
            description=self._rng.choice(DESCRIPTIONS),
            price=self._price(category_id),
            category_id=category_id,
            status=self._rng.choice(list(ProductStatus)),
            stock=ProductStock(self._rng.randint(0, 50)),
            created_at=created,
            updated_at=_to_millis(updated),
        )

    def _title(self, category_id: str) -> str:
        template = _TEMPLATES.get(category_id)
        brand = self._rng.choice(BRANDS)
        if template is None:
            return f"Producto {brand} {self._rng.randint(1000, 9999)}"
        values = {name: self._rng.choice(options) for name, options in template.variants.items()}
        return self._rng.choice(template.titles).format(brand=brand, **values)

    def _price(self, category_id: str) -> Price:
        template = _TEMPLATES.get(category_id)
        low, high = template.price_range if template else _FALLBACK_PRICE_RANGE
        amount = _cents(self._rng.uniform(low, high))
        original = None
        if self._rng.random() > 0.7:
            original = _cents(float(amount) * self._rng.uniform(1.1, 1.5))
        return Price(amount, SAMPLE_CURRENCY, original)

    def _created_at(self) -> datetime:
        span = (_CREATED_UNTIL - _CREATED_FROM).total_seconds()
        return _to_millis(_CREATED_FROM + timedelta(seconds=self._rng.uniform(0, span)))


def _cents(value: float) -> Decimal:
    return Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP)


def _to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


async def generate_catalog(
    file_store: JsonFileStore,
    count: int = DEFAULT_PRODUCT_COUNT,
    *,
    products_file: str = "products.json",
    categories_file: str = "categories.json",
    rng: random.Random | None = None,
) -> tuple[int, int]:
    """Replace both data files with a generated catalog.

    Existing files are backed up first. Returns ``(categories, products)``.
    """
    generator = SampleCatalogGenerator(rng)
    categories = generator.categories()
    products = generator.products(count)

    for filename in (categories_file, products_file):
        await file_store.backup(filename)
    await file_store.write(categories_file, categories)
    await file_store.write(
        products_file, [ProductRecordMapper.to_record(p) for p in products]
    )

    logger.info(
        "Generated %d categories and %d products in %s",
        len(categories),
        len(products),
        file_store.data_dir,
    )
    return len(categories), len(products)


async def clean_catalog(file_store: JsonFileStore, *filenames: str) -> None:
    """Reset each file to an empty JSON array, backing it up first."""
    for filename in filenames:
        await file_store.backup(filename)
        await file_store.write(filename, [])
    logger.info("Reset %s in %s", ", ".join(filenames), file_store.data_dir)
