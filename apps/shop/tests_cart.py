import uuid

import pytest

from .models import CartItem

pytestmark = pytest.mark.django_db


def _add(client, product, quantity):
    return client.post("/api/cart/add", {"product_id": str(product.id), "quantity": quantity}, format="json")


def test_add_creates_then_merges_quantity(customer, make_product, client_for):
    c = client_for(customer)
    product = make_product()

    first = _add(c, product, 1)
    assert first.status_code == 201
    assert first.json()["message"] == "已添加到购物车"

    second = _add(c, product, 2)
    assert second.status_code == 200
    assert second.json()["cart_item"]["quantity"] == 3
    assert CartItem.objects.filter(user=customer).count() == 1


def test_negative_merge_removes_line(customer, make_product, client_for):
    c = client_for(customer)
    product = make_product()
    _add(c, product, 2)

    resp = _add(c, product, -2)

    assert resp.json()["removed"] is True
    assert not CartItem.objects.filter(user=customer).exists()


def test_new_line_needs_positive_quantity(customer, make_product, client_for):
    resp = _add(client_for(customer), make_product(), 0)
    assert resp.status_code == 400
    assert resp.json()["message"] == "数量必须大于0"


def test_add_unknown_product(customer, client_for):
    resp = client_for(customer).post(
        "/api/cart/add", {"product_id": str(uuid.uuid4()), "quantity": 1}, format="json"
    )
    assert resp.status_code == 404


def test_get_cart_lines_and_total(customer, make_product, client_for):
    c = client_for(customer)
    _add(c, make_product("10.00"), 2)
    _add(c, make_product("2.50"), 1)

    body = c.get("/api/cart").json()

    assert body["total"] == 22.5
    assert sorted(line["subtotal"] for line in body["items"]) == [2.5, 20.0]


def test_update_and_remove_own_line_only(make_user, make_product, client_for):
    owner, other = make_user(), make_user()
    item = CartItem.objects.create(user=owner, product=make_product(), quantity=1)
    url = f"/api/cart/{item.id}"

    assert client_for(other).put(url, {"quantity": 5}, format="json").status_code == 404
    assert client_for(other).delete(url).status_code == 404

    resp = client_for(owner).put(url, {"quantity": 4}, format="json")
    assert resp.json()["cart_item"]["quantity"] == 4

    resp = client_for(owner).put(url, {"quantity": 0}, format="json")
    assert resp.json()["removed"] is True
    assert not CartItem.objects.filter(pk=item.pk).exists()


def test_cart_requires_token(api_client):
    resp = api_client.get("/api/cart")
    assert resp.status_code == 401


def test_oversized_quantity_is_a_validation_error(customer, make_product, client_for):
    c = client_for(customer)
    product = make_product()

    resp = _add(c, product, 10**20)
    assert resp.status_code == 400
    assert resp.json()["message"] == "输入验证失败"
    assert "quantity" in resp.json()["errors"]

    _add(c, product, 2**31 - 1)
    merged = _add(c, product, 1)
    assert merged.status_code == 400
    assert CartItem.objects.get(user=customer).quantity == 2**31 - 1

    item = CartItem.objects.get(user=customer)
    assert c.put(f"/api/cart/{item.id}", {"quantity": 10**20}, format="json").status_code == 400
