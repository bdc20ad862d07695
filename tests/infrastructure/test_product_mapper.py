"""Tests for ProductRecordMapper."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from catalog.domain.exceptions import MappingError
from catalog.domain.model.value_objects import ProductStatus
from catalog.infrastructure.persistence.product_mapper import ProductRecordMapper
from tests.fakes import make_product


def _record(**overrides):
    record = {
        "id": "MLA123456",
        "title": "Phone",
        "description": "A phone",
        "price": {"amount": 80.5, "currency": "ARS", "originalAmount": 100},
        "categoryId": "CAT_PHONES",
        "status": "ACTIVE",
        "availableQuantity": 4,
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-02T12:30:45.123Z",
    }
    record.update(overrides)
    return record


class TestToDomain:

    def test_maps_all_fields(self):
        product = ProductRecordMapper.to_domain(_record())

        assert str(product.id) == "MLA123456"
        assert product.title == "Phone"
        assert product.price.amount == Decimal("80.5")
        assert product.price.original_amount == Decimal("100")
        assert product.category_id == "CAT_PHONES"
        assert product.status is ProductStatus.ACTIVE
        assert product.stock.value == 4
        assert product.updated_at == datetime(
            2024, 1, 2, 12, 30, 45, 123000, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": "bad-id"},
            {"price": {"amount": -1, "currency": "ARS"}},
            {"price": {"amount": 10, "currency": "ARS", "originalAmount": 5}},
            {"status": "archived"},
            {"price": {"amount": float("nan"), "currency": "ARS"}},
            {"price": {"amount": 10, "currency": "ARS", "originalAmount": float("inf")}},
            {"availableQuantity": -2},
            {"createdAt": "not a date"},
        ],
    )
    def test_invalid_values_raise_mapping_error(self, overrides):
        with pytest.raises(MappingError, match="Error mapping product from record"):
            ProductRecordMapper.to_domain(_record(**overrides))


class TestToRecord:

    def test_omits_original_amount_when_absent(self):
        record = ProductRecordMapper.to_record(make_product(amount="99.90"))
        assert record["price"] == {"amount": 99.9, "currency": "ARS"}

    def test_includes_original_amount(self):
        record = ProductRecordMapper.to_record(
            make_product(amount="80", original_amount="100")
        )
        assert record["price"] == {"amount": 80, "currency": "ARS", "originalAmount": 100}

    def test_field_names_and_timestamps(self):
        record = ProductRecordMapper.to_record(make_product("MLA100001"))
        assert set(record) == {
            "id",
            "title",
            "description",
            "price",
            "categoryId",
            "status",
            "availableQuantity",
            "createdAt",
            "updatedAt",
        }
        assert record["status"] == "active"
        assert record["updatedAt"] == "2024-01-15T10:30:00.000Z"


class TestRoundTrip:

    @pytest.mark.parametrize("original_amount", [None, "150.25"])
    def test_to_domain_reproduces_product(self, original_amount):
        product = make_product(
            "550e8400-e29b-41d4-a716-446655440000",
            status=ProductStatus.PENDING,
            quantity=0,
            amount="120.75",
            original_amount=original_amount,
        )
        assert ProductRecordMapper.to_domain(ProductRecordMapper.to_record(product)) == product


class TestValidate:

    def test_valid_record(self):
        assert ProductRecordMapper.validate(_record()) is True

    def test_original_amount_is_optional(self):
        assert ProductRecordMapper.validate(
            _record(price={"amount": 10, "currency": "ARS"})
        ) is True

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "MLA123456",
            [],
            _record(id=123),
            _record(title=None),
            _record(price="10 ARS"),
            _record(price={"amount": "10", "currency": "ARS"}),
            _record(price={"amount": True, "currency": "ARS"}),
            _record(price={"amount": 10}),
            _record(price={"amount": float("nan"), "currency": "ARS"}),
            _record(price={"amount": float("inf"), "currency": "ARS"}),
            _record(price={"amount": 10, "currency": "ARS", "originalAmount": float("nan")}),
            _record(price={"amount": 10, "currency": "ARS", "originalAmount": "12"}),
            _record(availableQuantity=float("inf")),
            _record(availableQuantity="4"),
            _record(updatedAt=None),
        ],
    )
    def test_invalid_shapes(self, raw):
        assert ProductRecordMapper.validate(raw) is False

    def test_missing_field(self):
        record = _record()
        del record["description"]
        assert ProductRecordMapper.validate(record) is False
