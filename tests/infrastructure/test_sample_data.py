"""Tests for the sample catalog generator."""

import json
import random
from decimal import Decimal

import pytest

from catalog.infrastructure.persistence.file_store import JsonFileStore
from catalog.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from catalog.infrastructure.persistence.sample_data import (
    CATEGORIES,
    SampleCatalogGenerator,
    clean_catalog,
    generate_catalog,
)

LEAF_IDS = {c["id"] for c in CATEGORIES if "parentId" in c}


@pytest.fixture
def generator():
    return SampleCatalogGenerator(random.Random(1234))


class TestGenerator:

    def test_ids_are_unique_and_well_formed(self, generator):
        products = generator.products(200)

        ids = [str(p.id) for p in products]
        assert len(set(ids)) == 200
        assert all(i.startswith("MLU") and len(i) == 12 for i in ids)

    def test_products_only_in_leaf_categories(self, generator):
        assert {p.category_id for p in generator.products(100)} <= LEAF_IDS

    def test_titles_have_no_unfilled_placeholders(self, generator):
        for product in generator.products(100):
            assert "{" not in product.title and "}" not in product.title

    def test_phone_prices_stay_in_range(self, generator):
        phones = [
            p for p in generator.products(200)
            if p.category_id == "CAT_ELECTRONICS_PHONES"
        ]
        assert phones
        for product in phones:
            assert Decimal("300") <= product.price.amount <= Decimal("1500")
            assert product.price.amount == product.price.amount.quantize(Decimal("0.01"))

    def test_discounts_are_above_the_current_price(self, generator):
        discounted = [p for p in generator.products(100) if p.price.original_amount]
        assert discounted
        assert all(p.price.has_discount for p in discounted)

    def test_timestamps_are_ordered_and_millisecond_precise(self, generator):
        for product in generator.products(50):
            assert product.updated_at >= product.created_at
            assert product.created_at.microsecond % 1000 == 0
            assert product.updated_at.microsecond % 1000 == 0

    def test_categories_are_copies(self, generator):
        categories = generator.categories()
        categories[0]["path"].append({"id": "X", "name": "X"})
        assert generator.categories()[0]["path"] == CATEGORIES[0]["path"]


class TestGenerateCatalog:

    @pytest.mark.asyncio
    async def test_generated_file_hydrates_every_record(self, tmp_path):
        store = JsonFileStore(tmp_path)

        counts = await generate_catalog(store, 40, rng=random.Random(5))

        assert counts == (len(CATEGORIES), 40)
        products = await JsonProductRepository(store).find_all()
        assert len(products) == 40

    @pytest.mark.asyncio
    async def test_zero_products(self, tmp_path):
        store = JsonFileStore(tmp_path)

        await generate_catalog(store, 0)

        assert await store.read("products.json") == []
        assert len(await store.read("categories.json")) == len(CATEGORIES)

    @pytest.mark.asyncio
    async def test_clean_empties_files(self, tmp_path):
        store = JsonFileStore(tmp_path)
        await generate_catalog(store, 3)

        await clean_catalog(store, "products.json", "categories.json")

        for name in ("products.json", "categories.json"):
            assert json.loads(store.path_for(name).read_text(encoding="utf-8")) == []
        assert list(tmp_path.glob("products.json.backup.*"))
