from __future__ import annotations

import itertools
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.crud.listing import FEATURED_LISTINGS_LIMIT, build_listing_predicates, listing as crud_listing
from app.schemas.listing import ListingFilters


@pytest.fixture()
def catalog(make_user, make_listing):
    make_user("seller-a", first_name="Ana", email="ana@example.com")
    make_user("seller-b", first_name="Ben", email="ben@example.com")
    return {
        "book": make_listing(
            "seller-a", title="Python Cookbook", description="Recipes for Python 3 developers",
            price=Decimal("25.00"), category="books", condition="good",
        ),
        "novel": make_listing(
            "seller-b", title="Old novel", description="A paperback with a torn cover",
            price=Decimal("5.50"), category="books", condition="fair",
        ),
        "laptop": make_listing(
            "seller-a", title="Laptop", description="Lightweight laptop, python preinstalled",
            price=Decimal("450.00"), category="electronics", condition="like-new",
        ),
        "hidden": make_listing(
            "seller-b", title="Python poster", description="Deleted before anyone saw it",
            price=Decimal("12.00"), category="art", condition="new", is_active=False,
        ),
    }


def _ids(listings) -> set[int]:
    return {item.id for item in listings}


def test_predicates_always_restrict_to_active_listings() -> None:
    assert len(build_listing_predicates()) == 1
    assert len(build_listing_predicates(ListingFilters())) == 1
    assert len(build_listing_predicates(ListingFilters(category="books", search="x"))) == 3


def test_no_filters_returns_active_listings_newest_first(db, catalog) -> None:
    result = crud_listing.get_listings(db)

    assert [item.id for item in result] == [
        catalog["laptop"].id, catalog["novel"].id, catalog["book"].id
    ]


def test_category_and_price_range_are_conjunctive(db, catalog) -> None:
    filters = ListingFilters(category="books", price_min=Decimal("10"), price_max=Decimal("100"))

    assert _ids(crud_listing.get_listings(db, filters=filters)) == {catalog["book"].id}


def test_price_bounds_are_inclusive(db, catalog) -> None:
    exact = ListingFilters(price_min=Decimal("25.00"), price_max=Decimal("25.00"))
    assert _ids(crud_listing.get_listings(db, filters=exact)) == {catalog["book"].id}

    only_max = ListingFilters(price_max=Decimal("5.50"))
    assert _ids(crud_listing.get_listings(db, filters=only_max)) == {catalog["novel"].id}


def test_search_is_case_insensitive_on_title_or_description(db, catalog) -> None:
    result = crud_listing.get_listings(db, filters=ListingFilters(search="PYTHON"))

    assert _ids(result) == {catalog["book"].id, catalog["laptop"].id}


def test_search_treats_wildcards_literally(db, catalog) -> None:
    assert crud_listing.get_listings(db, filters=ListingFilters(search="%")) == []


def test_condition_and_seller_filters(db, catalog) -> None:
    filters = ListingFilters(condition="good", seller_id="seller-a")
    assert _ids(crud_listing.get_listings(db, filters=filters)) == {catalog["book"].id}

    by_seller = ListingFilters(seller_id="seller-b")
    assert _ids(crud_listing.get_listings(db, filters=by_seller)) == {catalog["novel"].id}


def test_filter_order_does_not_change_result(db, catalog) -> None:
    supplied = [
        ("category", "books"),
        ("price_min", "1"),
        ("search", "python"),
        ("seller_id", "seller-a"),
    ]
    results = {
        frozenset(_ids(crud_listing.get_listings(db, filters=ListingFilters(**dict(order)))))
        for order in itertools.permutations(supplied)
    }

    assert results == {frozenset({catalog["book"].id})}


def test_listing_seller_projection_is_loaded(db, catalog) -> None:
    result = crud_listing.get_listings(db, filters=ListingFilters(seller_id="seller-a"))

    assert all(item.seller.first_name == "Ana" for item in result)


def test_get_with_seller_returns_inactive_listing(db, catalog) -> None:
    hidden = crud_listing.get_with_seller(db, id=catalog["hidden"].id)

    assert hidden is not None
    assert hidden.is_active is False
    assert hidden.seller.email == "ben@example.com"


def test_featured_listings_are_capped(db, make_user, make_listing) -> None:
    make_user("seller-f")
    for index in range(FEATURED_LISTINGS_LIMIT + 2):
        make_listing("seller-f", title=f"Featured {index}", is_featured=True)
    make_listing("seller-f", title="Featured but gone", is_featured=True, is_active=False)
    make_listing("seller-f", title="Plain")

    featured = crud_listing.get_featured(db)

    assert len(featured) == FEATURED_LISTINGS_LIMIT
    assert all(item.is_featured and item.is_active for item in featured)
    assert featured[0].title == f"Featured {FEATURED_LISTINGS_LIMIT + 1}"


def test_soft_delete_is_idempotent(db, catalog) -> None:
    book = catalog["book"]

    assert crud_listing.soft_delete(db, db_obj=book) is True
    assert crud_listing.soft_delete(db, db_obj=book) is True
    assert book.id not in _ids(crud_listing.get_listings(db))
    assert crud_listing.get(db, book.id).is_active is False


def test_filters_reject_unknown_keys() -> None:
    with pytest.raises(ValidationError):
        ListingFilters.model_validate({"category": "books", "sort": "price"})


def test_filters_accept_camel_case_and_blank_values() -> None:
    filters = ListingFilters.model_validate({"priceMin": "10", "sellerId": "s", "category": ""})

    assert filters.price_min == Decimal("10")
    assert filters.seller_id == "s"
    assert filters.category is None
