"""Tests for the SearchProducts use case.

Uses the in-memory fake repository, no file I/O.
"""

import pytest

from catalog.application.dto import SearchParams
from catalog.application.search_products import SearchProductsHandler
from catalog.domain.exceptions import InvalidSearchParamsError
from catalog.domain.model.value_objects import ProductStatus
from tests.fakes import FakeProductRepository, make_product


def _setup(products=None):
    repo = FakeProductRepository(products or [])
    return SearchProductsHandler(repo), repo


def _ids(result):
    return [str(p.id) for p in result.products]


class TestSearchValidation:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "params",
        [
            SearchParams(limit=0),
            SearchParams(limit=101),
            SearchParams(offset=-1),
            SearchParams(category_id="CAT_PHONES", limit=-5),
        ],
    )
    async def test_invalid_params_rejected_before_fetch(self, params):
        handler, repo = _setup([make_product()])

        with pytest.raises(InvalidSearchParamsError):
            await handler.handle(params)

        assert repo.calls == []

    @pytest.mark.asyncio
    async def test_boundaries_accepted(self):
        handler, _ = _setup()
        assert (await handler.handle(SearchParams(limit=1, offset=0))).limit == 1
        assert (await handler.handle(SearchParams(limit=100))).limit == 100


class TestSearchPagination:

    @pytest.mark.asyncio
    async def test_defaults(self):
        handler, repo = _setup()

        result = await handler.handle(SearchParams())

        assert (result.limit, result.offset, result.has_more) == (20, 0, False)
        assert repo.calls == [("find_all", 21, 0)]

    @pytest.mark.asyncio
    async def test_over_fetches_one_record(self):
        handler, repo = _setup()
        await handler.handle(SearchParams(category_id="CAT_PHONES", limit=5, offset=3))
        assert repo.calls == [("find_by_category", "CAT_PHONES", 6, 3)]

    @pytest.mark.asyncio
    async def test_three_available_with_limit_two_has_more(self):
        handler, _ = _setup(
            [make_product(f"MLA10000{i}", age_minutes=i) for i in range(1, 4)]
        )

        result = await handler.handle(SearchParams(category_id="CAT_PHONES", limit=2))

        assert _ids(result) == ["MLA100001", "MLA100002"]
        assert result.has_more is True
        assert result.next_offset == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 1, 2])
    async def test_two_or_fewer_available_has_no_more(self, count):
        handler, _ = _setup(
            [make_product(f"MLA10000{i}", age_minutes=i) for i in range(1, count + 1)]
        )

        result = await handler.handle(SearchParams(category_id="CAT_PHONES", limit=2))

        assert len(result.products) == count
        assert result.has_more is False
        assert result.next_offset is None

    @pytest.mark.asyncio
    async def test_category_scoping(self):
        handler, _ = _setup(
            [
                make_product("MLA100001", category_id="CAT_PHONES"),
                make_product("MLA100002", category_id="CAT_LAPTOPS"),
            ]
        )

        result = await handler.handle(SearchParams(category_id="CAT_LAPTOPS"))

        assert _ids(result) == ["MLA100002"]

    @pytest.mark.asyncio
    async def test_no_category_searches_everything(self):
        handler, repo = _setup(
            [
                make_product("MLA100001", category_id="CAT_PHONES", age_minutes=1),
                make_product("MLA100002", category_id="CAT_LAPTOPS", age_minutes=2),
            ]
        )

        result = await handler.handle(SearchParams())

        assert _ids(result) == ["MLA100001", "MLA100002"]
        assert repo.calls[0][0] == "find_all"


class TestSearchAvailability:

    @pytest.mark.asyncio
    async def test_unavailable_products_filtered_out(self):
        handler, _ = _setup(
            [
                make_product("MLA100001", age_minutes=1),
                make_product("MLA100002", status=ProductStatus.INACTIVE, age_minutes=2),
                make_product("MLA100003", quantity=0, age_minutes=3),
                make_product("MLA100004", status=ProductStatus.DISCONTINUED, age_minutes=4),
                make_product("MLA100005", age_minutes=5),
            ]
        )

        result = await handler.handle(SearchParams())

        assert _ids(result) == ["MLA100001", "MLA100005"]

    @pytest.mark.asyncio
    async def test_page_filled_past_unavailable_window(self):
        # The first window of limit+1 holds only one available product.
        products = [make_product("MLA100001", age_minutes=1)]
        products += [
            make_product(f"MLA20000{i}", quantity=0, age_minutes=10 + i) for i in range(3)
        ]
        products += [make_product(f"MLA30000{i}", age_minutes=20 + i) for i in range(3)]
        handler, repo = _setup(products)

        result = await handler.handle(SearchParams(limit=3))

        assert _ids(result) == ["MLA100001", "MLA300000", "MLA300001"]
        assert result.has_more is True
        # MLA300001 sits at raw position 5, so the next page starts at 6.
        assert result.next_offset == 6
        assert [c[2] for c in repo.calls] == [0, 4]

    @pytest.mark.asyncio
    async def test_next_offset_continues_without_duplicates(self):
        products = [
            make_product(f"MLA10000{i}", quantity=0 if i % 2 else 5, age_minutes=i)
            for i in range(10)
        ]
        handler, _ = _setup(products)

        first = await handler.handle(SearchParams(limit=2))
        second = await handler.handle(SearchParams(limit=2, offset=first.next_offset))
        third = await handler.handle(SearchParams(limit=2, offset=second.next_offset))

        assert _ids(first) == ["MLA100000", "MLA100002"]
        assert _ids(second) == ["MLA100004", "MLA100006"]
        assert _ids(third) == ["MLA100008"]
        assert third.has_more is False
