import uuid

import pytest

from . import services
from .models import CartItem, Order, OrderStatus

pytestmark = pytest.mark.django_db


@pytest.fixture
def place_order(identity_of):
    def _place(buyer, *products):
        for p in products:
            CartItem.objects.create(user=buyer, product=p, quantity=1)
        return services.checkout(identity_of(buyer))
    return _place


def _set_status(client, order_id, value):
    return client.put(f"/api/orders/{order_id}/status", {"status": value}, format="json")


def test_vendor_may_only_ship_or_process(customer, vendor, make_product, place_order, client_for):
    order = place_order(customer, make_product())
    c = client_for(vendor)

    resp = _set_status(c, order.id, "delivered")
    assert resp.status_code == 403
    assert Order.objects.get(pk=order.pk).status == OrderStatus.PENDING

    resp = _set_status(c, order.id, "shipped")
    assert resp.status_code == 200
    assert resp.json() == {"message": "订单状态已更新", "status": "shipped"}
    assert Order.objects.get(pk=order.pk).status == OrderStatus.SHIPPED


def test_vendor_without_products_in_order(customer, make_user, make_product, place_order, client_for):
    order = place_order(customer, make_product())
    stranger = make_user("vendor")

    resp = _set_status(client_for(stranger), order.id, "processing")
    assert resp.status_code == 403
    assert resp.json()["message"] == "无权修改不包含您产品的订单"


def test_customer_cannot_change_status(customer, make_product, place_order, client_for):
    order = place_order(customer, make_product())
    resp = _set_status(client_for(customer), order.id, "cancelled")
    assert resp.status_code == 403


def test_admin_sets_any_status(customer, admin, make_product, place_order, client_for):
    order = place_order(customer, make_product())
    resp = _set_status(client_for(admin), order.id, "Delivered")
    assert resp.status_code == 200
    assert Order.objects.get(pk=order.pk).status == OrderStatus.DELIVERED


def test_status_is_validated_before_lookup(admin, client_for):
    c = client_for(admin)
    resp = _set_status(c, uuid.uuid4(), "teleported")
    assert resp.status_code == 400
    assert resp.json()["message"] == "无效的订单状态"

    assert _set_status(c, uuid.uuid4(), "shipped").status_code == 404


def test_order_visibility(make_user, vendor, make_product, place_order, client_for):
    buyer, other = make_user(), make_user()
    order = place_order(buyer, make_product())
    url = f"/api/orders/{order.id}"

    assert client_for(buyer).get(url).status_code == 200
    assert client_for(vendor).get(url).status_code == 200
    assert client_for(other).get(url).status_code == 403
    assert client_for(make_user("vendor")).get(url).status_code == 403

    assert len(client_for(buyer).get("/api/orders").json()["orders"]) == 1
    assert client_for(other).get("/api/orders").json()["orders"] == []


def test_vendor_orders_only_show_own_items(customer, vendor, make_user, make_product, place_order, client_for):
    rival = make_user("vendor")
    mine = make_product("10.00")
    theirs = make_product("7.00", owner=rival)
    place_order(customer, mine, theirs)

    orders = client_for(vendor).get("/api/orders/vendor").json()["orders"]

    assert len(orders) == 1
    assert [i["product_id"] for i in orders[0]["items"]] == [str(mine.id)]
    assert orders[0]["total"] == 10.0


def test_all_orders_is_admin_only(customer, admin, make_product, place_order, client_for):
    place_order(customer, make_product())
    assert client_for(customer).get("/api/orders/all").status_code == 403
    assert len(client_for(admin).get("/api/orders/all").json()["orders"]) == 1


def test_blank_status_is_an_invalid_status(customer, admin, make_product, place_order, client_for):
    order = place_order(customer, make_product())
    resp = _set_status(client_for(admin), order.id, "")
    assert resp.status_code == 400
    assert resp.json()["message"] == "无效的订单状态"
