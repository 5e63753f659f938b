import uuid

import pytest

from apps.catalog.models import Product

from .models import Favorite

pytestmark = pytest.mark.django_db


def test_add_list_check_remove(customer, make_product, client_for):
    c = client_for(customer)
    product = make_product("3.00")

    added = c.post("/api/favorites", {"product_id": str(product.id)}, format="json")
    assert added.status_code == 201
    assert added.json()["message"] == "商品已添加到收藏夹"

    again = c.post("/api/favorites", {"product_id": str(product.id)}, format="json")
    assert again.status_code == 400
    assert again.json()["message"] == "该商品已经在收藏夹中"

    listed = c.get("/api/favorites").json()["favorites"]
    assert [f["product"]["id"] for f in listed] == [str(product.id)]
    assert listed[0]["product"]["price"] == 3.0

    assert c.get(f"/api/favorites/check/{product.id}").json() == {"is_favorite": True}

    assert c.delete(f"/api/favorites/{product.id}").json() == {"message": "商品已从收藏夹移除"}
    assert c.get(f"/api/favorites/check/{product.id}").json() == {"is_favorite": False}
    assert c.delete(f"/api/favorites/{product.id}").status_code == 404


def test_favorite_of_unknown_product(customer, client_for):
    resp = client_for(customer).post("/api/favorites", {"product_id": str(uuid.uuid4())}, format="json")
    assert resp.status_code == 404


def test_deleted_product_shows_as_null(customer, make_product, client_for):
    product = make_product()
    Favorite.objects.create(user=customer, product=product)
    Product.objects.filter(pk=product.pk).delete()

    listed = client_for(customer).get("/api/favorites").json()["favorites"]
    assert listed[0]["product"] is None


def test_favorites_are_customer_only(vendor, admin, client_for):
    for user in (vendor, admin):
        resp = client_for(user).get("/api/favorites")
        assert resp.status_code == 403
        assert resp.json()["message"] == "只有普通用户可以使用收藏功能"
