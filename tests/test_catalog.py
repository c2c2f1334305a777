"""Shop listing, product detail, reviews, wishlist and profile."""
from __future__ import annotations

import pytest

from storefront.errors import ValidationError
from storefront.services.products import filter_products, list_facets, stock_badge
from storefront.services.reviews import average_rating

from tests.conftest import product


@pytest.fixture()
def catalog(db):
    db.seed("products", "p1", product("Air Max 90", price=899.0, stock=10, brand="Nike", size="9",
                                      createdAt="2026-01-01T00:00:00+00:00"))
    db.seed("products", "p2", product("Samba OG", price=1799.0, stock=3, brand="Adidas", size="8",
                                      createdAt="2026-01-03T00:00:00+00:00"))
    db.seed("products", "p3", product("Jordan 4", price=3999.0, stock=0, brand="Nike", size="10",
                                      createdAt="2026-01-02T00:00:00+00:00"))
    db.seed("products", "p4", product("Retired", price=500.0, isActive=False))
    return db


# ---------- Listing ----------

def test_shop_lists_active_products_newest_first(client, catalog):
    data = client.get("/products").json()
    assert [p["id"] for p in data["products"]] == ["p2", "p3", "p1"]
    assert data["facets"] == {"brands": ["Adidas", "Nike"], "sizes": ["8", "10", "9"]}


def test_shop_stock_badges(client, catalog):
    badges = {p["id"]: p["stock"] for p in client.get("/products").json()["products"]}
    assert badges == {"p1": "in_stock", "p2": "low_stock", "p3": "out_of_stock"}


@pytest.mark.parametrize("params, expected", [
    ({"search": "samba"}, ["p2"]),
    ({"search": "NIKE"}, ["p3", "p1"]),
    ({"brand": "Nike"}, ["p3", "p1"]),
    ({"size": "8"}, ["p2"]),
    ({"priceRange": "low"}, ["p1"]),
    ({"priceRange": "mid"}, ["p2"]),
    ({"priceRange": "high"}, ["p3"]),
    ({"brand": "all", "size": "all", "priceRange": "all"}, ["p2", "p3", "p1"]),
])
def test_shop_filters(client, catalog, params, expected):
    data = client.get("/products", params=params).json()
    assert [p["id"] for p in data["products"]] == expected


def test_unknown_price_range(client, catalog):
    assert client.get("/products", params={"priceRange": "cheap"}).status_code == 400


def test_price_band_edges():
    items = [{"price": 1000}, {"price": 999.99}, {"price": 2500}]
    assert filter_products(items, price_range="mid") == [{"price": 1000}]
    assert filter_products(items, price_range="high") == [{"price": 2500}]
    with pytest.raises(ValidationError):
        filter_products(items, price_range="nope")


def test_facets_skip_blank_values():
    assert list_facets([{"brand": "", "size": None}, {"brand": "Puma", "size": "7"}]) == {
        "brands": ["Puma"], "sizes": ["7"],
    }


def test_stock_badge_threshold():
    assert stock_badge({"stockQuantity": 5}) == "in_stock"
    assert stock_badge({"stockQuantity": 1}) == "low_stock"
    assert stock_badge({}) == "out_of_stock"


def test_product_detail_includes_reviews(client, catalog):
    catalog.seed("product_reviews", "r1", {"productId": "p1", "userId": "u1", "rating": 5,
                                           "reviewText": "great", "createdAt": "2026-02-01T00:00:00+00:00"})
    catalog.seed("product_reviews", "r2", {"productId": "p1", "userId": "u2", "rating": 4,
                                           "reviewText": "", "createdAt": "2026-02-02T00:00:00+00:00"})
    data = client.get("/products/p1").json()
    assert data["averageRating"] == 4.5
    assert [r["id"] for r in data["reviews"]] == ["r2", "r1"]


def test_product_detail_missing(client, catalog):
    assert client.get("/products/nope").status_code == 404


# ---------- Reviews ----------

def test_review_needs_a_rating(client, catalog, login):
    login("u1")
    resp = client.post("/reviews/p1", json={"rating": 0, "reviewText": "meh"})
    assert resp.status_code == 400
    assert catalog.rows("product_reviews") == {}


def test_review_is_stored_with_reviewer_name(client, catalog, login):
    login("u1")
    catalog.seed("profiles", "u1", {"fullName": "Lerato K"})
    resp = client.post("/reviews/p1", json={"rating": 4, "reviewText": " comfy "})
    assert resp.status_code == 200
    body = resp.json()
    assert body["reviewerName"] == "Lerato K"
    assert body["reviewText"] == "comfy"
    assert [r["id"] for r in client.get("/reviews/p1").json()] == [body["id"]]


def test_review_unknown_product(client, catalog, login):
    login("u1")
    assert client.post("/reviews/nope", json={"rating": 3}).status_code == 400


def test_average_rating_of_nothing():
    assert average_rating([]) == 0.0


# ---------- Wishlist ----------

def test_wishlist_toggle(client, catalog, login):
    login("u1")
    assert client.post("/wishlist/p2").json() == {"productId": "p2", "inWishlist": True}
    data = client.get("/wishlist").json()
    assert data["productIds"] == ["p2"]
    assert data["products"][0]["name"] == "Samba OG"

    assert client.post("/wishlist/p2").json()["inWishlist"] is False
    assert client.get("/wishlist").json()["productIds"] == []


def test_wishlist_unknown_product(client, catalog, login):
    login("u1")
    assert client.post("/wishlist/nope").status_code == 400
    assert catalog.rows("wishlist") == {}


def test_wishlist_entry_for_deleted_product_can_be_removed(client, catalog, login):
    login("u1")
    catalog.seed("wishlist", "u1_gone", {"userId": "u1", "productId": "gone"})
    assert client.post("/wishlist/gone").json() == {"productId": "gone", "inWishlist": False}
    assert catalog.rows("wishlist") == {}


def test_wishlists_are_per_user(client, catalog, login):
    login("u1")
    client.post("/wishlist/p1")
    login("u2")
    assert client.get("/wishlist").json()["productIds"] == []


# ---------- Profile ----------

def test_profile_update_only_touches_name_and_phone(client, db, login):
    login("u1", email="u1@example.com")
    db.seed("profiles", "u1", {"fullName": "Old", "email": "u1@example.com"})

    resp = client.patch("/profile", json={"fullName": "New Name", "phone": "082 555 0101"})
    assert resp.status_code == 200
    assert resp.json() == {"id": "u1", "fullName": "New Name", "phone": "082 555 0101",
                           "email": "u1@example.com"}


def test_profile_defaults_when_missing(client, db, login):
    login("u9", email="u9@example.com")
    assert client.get("/profile").json() == {"id": "u9", "email": "u9@example.com",
                                             "fullName": None, "phone": None}
