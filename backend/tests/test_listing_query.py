import pytest

from marketplace.services.listing_query import (
    MAX_LIMIT,
    ListingFilters,
    SortOrder,
    build_listing_query,
)


def _compile(filters: ListingFilters):
    return build_listing_query(filters).compile()


def test_default_orders_newest_first_without_where_or_limit():
    sql = str(_compile(ListingFilters()))
    assert "WHERE" not in sql
    assert "LIMIT" not in sql
    assert "ORDER BY products.created_at DESC, products.id DESC" in sql


@pytest.mark.parametrize(
    "sort, expected",
    [
        ("price_low", "ORDER BY products.price ASC, products.id DESC"),
        ("price_high", "ORDER BY products.price DESC, products.id DESC"),
        ("newest", "ORDER BY products.created_at DESC, products.id DESC"),
        ("cheapest-ish", "ORDER BY products.created_at DESC, products.id DESC"),
    ],
)
def test_sort_keys(sort, expected):
    assert expected in str(_compile(ListingFilters(sort=sort)))


def test_category_and_limit_are_bound_parameters():
    compiled = _compile(ListingFilters(category="home'; DROP TABLE products; --", limit=3))
    sql = str(compiled)

    assert "DROP TABLE" not in sql
    assert "products.category = :category_1" in sql
    assert "LIMIT :param_1" in sql
    assert compiled.params["category_1"] == "home'; DROP TABLE products; --"
    assert compiled.params["param_1"] == 3


@pytest.mark.parametrize("limit", [0, -5, MAX_LIMIT + 1])
def test_out_of_range_limit_rejected(limit):
    with pytest.raises(ValueError):
        ListingFilters(limit=limit)


def test_sort_order_parse_falls_back_to_newest():
    assert SortOrder.parse(None) is SortOrder.NEWEST
    assert SortOrder.parse("PRICE_LOW") is SortOrder.NEWEST
    assert SortOrder.parse("price_high") is SortOrder.PRICE_HIGH
