import uuid

import pytest

from .models import Product

pytestmark = pytest.mark.django_db


def test_listing_is_public(api_client, make_product):
    make_product(stock=0)
    make_product(stock=4)

    body = api_client.get("/api/products").json()

    assert body["total"] == 2
    assert sorted(p["in_stock"] for p in body["products"]) == [False, True]


def test_get_unknown_product(api_client):
    resp = api_client.get(f"/api/products/{uuid.uuid4()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "产品不存在"


def test_vendor_creates_product(vendor, client_for):
    resp = client_for(vendor).post(
        "/api/products", {"name": "Lamp", "price": "19.90", "stock": 3, "category": "home"}, format="json"
    )

    assert resp.status_code == 201
    assert resp.json()["vendor_id"] == str(vendor.id)
    assert resp.json()["price"] == 19.9
    assert Product.objects.get(name="Lamp").vendor_id == vendor.id


def test_customer_cannot_create_product(customer, client_for):
    resp = client_for(customer).post("/api/products", {"name": "x", "price": "1", "stock": 1}, format="json")
    assert resp.status_code == 403


def test_negative_price_or_stock_is_rejected(vendor, client_for):
    c = client_for(vendor)
    assert c.post("/api/products", {"name": "x", "price": "-1", "stock": 1}, format="json").status_code == 400
    assert c.post("/api/products", {"name": "x", "price": "1", "stock": -1}, format="json").status_code == 400


def test_only_owner_or_admin_edits(make_user, make_product, admin, client_for):
    product = make_product("5.00")
    url = f"/api/products/{product.id}"

    other = client_for(make_user("vendor")).put(url, {"price": "1.00"}, format="json")
    assert other.status_code == 403
    assert other.json()["message"] == "无权修改此产品"

    owner = client_for(product.vendor).put(url, {"stock": 9}, format="json")
    assert owner.status_code == 200
    assert owner.json()["stock"] == 9
    assert owner.json()["price"] == 5.0

    assert client_for(admin).delete(url).json() == {"message": "产品已删除"}
    assert not Product.objects.filter(pk=product.pk).exists()


def test_vendor_listing(vendor, make_user, make_product, admin, client_for):
    mine = make_product()
    make_product(owner=make_user("vendor"))

    ids = [p["id"] for p in client_for(vendor).get("/api/products/vendor").json()]
    assert ids == [str(mine.id)]

    assert len(client_for(admin).get("/api/products/vendor").json()) == 2


def test_oversized_stock_is_rejected(vendor, client_for):
    resp = client_for(vendor).post("/api/products", {"name": "x", "price": "1", "stock": 10**20}, format="json")
    assert resp.status_code == 400
    assert "stock" in resp.json()["errors"]
