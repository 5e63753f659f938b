import threading
import uuid
from decimal import Decimal

import pytest
from django.db import DatabaseError, connection

from apps.catalog.models import Product

from . import services
from .exceptions import EmptyCart, InsufficientStock
from .models import CartItem, Order, OrderItem

pytestmark = pytest.mark.django_db(transaction=True)


def test_checkout_rejects_unavailable_items_without_writing(customer, make_product, client_for):
    a = make_product("10.00", stock=5)
    b = make_product("5.00", stock=0)
    CartItem.objects.create(user=customer, product=a, quantity=2)
    CartItem.objects.create(user=customer, product=b, quantity=1)

    resp = client_for(customer).post("/api/cart/checkout")

    assert resp.status_code == 400
    assert resp.json()["unavailable_products"] == [{
        "product_id": str(b.id),
        "product_name": b.name,
        "requested_quantity": 1,
        "available_stock": 0,
    }]
    assert Order.objects.count() == 0  # 전체 롤백 확인
    a.refresh_from_db()
    assert a.stock == 5
    assert CartItem.objects.filter(user=customer).count() == 2


def test_checkout_creates_order_and_clears_cart(customer, make_product, client_for):
    a = make_product("10.00", stock=5)
    CartItem.objects.create(user=customer, product=a, quantity=2)

    resp = client_for(customer).post("/api/cart/checkout")

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "订单创建成功"
    order = body["order"]
    assert order["total"] == 20.0
    assert order["status"] == "pending"
    assert order["user_id"] == str(customer.id)
    assert [(i["product_id"], i["quantity"], i["price"]) for i in order["items"]] == [(str(a.id), 2, 10.0)]

    a.refresh_from_db()
    assert a.stock == 3
    assert not CartItem.objects.filter(user=customer).exists()


def test_checkout_with_empty_cart(customer, identity_of, client_for):
    with pytest.raises(EmptyCart):
        services.checkout(identity_of(customer))

    resp = client_for(customer).post("/api/cart/checkout")
    assert resp.status_code == 400
    assert resp.json()["message"] == "购物车为空，无法结账"
    assert Order.objects.count() == 0


def test_missing_product_is_reported_as_unavailable(customer, identity_of):
    ghost = uuid.uuid4()
    CartItem.objects.create(user=customer, product_id=ghost, quantity=1)

    with pytest.raises(InsufficientStock) as exc:
        services.checkout(identity_of(customer))

    assert exc.value.items == [{
        "product_id": str(ghost),
        "product_name": None,
        "requested_quantity": 1,
        "available_stock": 0,
        "message": "产品不存在",
    }]


def test_order_item_keeps_price_at_purchase(customer, make_product, identity_of, client_for):
    a = make_product("10.00", stock=5)
    CartItem.objects.create(user=customer, product=a, quantity=2)
    order = services.checkout(identity_of(customer))

    Product.objects.filter(pk=a.pk).update(price=Decimal("99.00"))

    resp = client_for(customer).get(f"/api/orders/{order.id}")
    assert resp.status_code == 200
    assert resp.json()["total"] == 20.0
    assert resp.json()["items"][0]["price"] == 10.0


def test_admin_is_blocked_from_every_cart_endpoint(admin, make_product, client_for):
    c = client_for(admin)
    product = make_product()
    item_url = f"/api/cart/{uuid.uuid4()}"

    responses = [
        c.get("/api/cart"),
        c.post("/api/cart/add", {"product_id": str(product.id), "quantity": 1}, format="json"),
        c.put(item_url, {"quantity": 1}, format="json"),
        c.delete(item_url),
        c.post("/api/cart/checkout"),
    ]

    assert [r.status_code for r in responses] == [403] * 5
    assert responses[0].json()["message"] == "管理员不能使用购物车功能"


def test_second_buyer_of_last_unit_is_rejected(make_user, make_product, client_for):
    a = make_product("10.00", stock=1)
    first, second = make_user(), make_user()
    for u in (first, second):
        CartItem.objects.create(user=u, product=a, quantity=1)

    assert client_for(first).post("/api/cart/checkout").status_code == 201

    resp = client_for(second).post("/api/cart/checkout")
    assert resp.status_code == 400
    assert resp.json()["unavailable_products"][0]["available_stock"] == 0

    a.refresh_from_db()
    assert a.stock == 0
    assert Order.objects.count() == 1
    assert CartItem.objects.filter(user=second).count() == 1


@pytest.mark.skipif(connection.vendor == "sqlite", reason="SQLite 는 행 잠금이 없음")
def test_concurrent_checkouts_never_oversell(make_user, make_product, identity_of):
    a = make_product("10.00", stock=3)
    buyers = [make_user() for _ in range(6)]
    for u in buyers:
        CartItem.objects.create(user=u, product=a, quantity=1)

    barrier = threading.Barrier(len(buyers))
    results = []

    def worker(user):
        barrier.wait()
        try:
            services.checkout(identity_of(user))
            results.append("ok")
        except InsufficientStock:
            results.append("rejected")
        finally:
            connection.close()

    threads = [threading.Thread(target=worker, args=(u,)) for u in buyers]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    a.refresh_from_db()
    assert results.count("ok") == 3
    assert results.count("rejected") == 3
    assert a.stock == 0
    assert OrderItem.objects.filter(product_id=a.pk).count() == 3


def test_database_failure_rolls_back_everything(customer, make_product, client_for, monkeypatch):
    a = make_product("10.00", stock=5)
    CartItem.objects.create(user=customer, product=a, quantity=2)

    def boom(user_id):
        # 주문 insert, 재고 차감 이후 마지막 단계에서 실패
        assert Order.objects.filter(user=customer).exists()
        assert Product.objects.get(pk=a.pk).stock == 3
        raise DatabaseError("connection lost")

    monkeypatch.setattr(services, "_clear_cart", boom)

    resp = client_for(customer).post("/api/cart/checkout")

    assert resp.status_code == 500
    assert resp.json()["message"] == "订单创建失败"
    assert Order.objects.count() == 0
    assert OrderItem.objects.count() == 0
    a.refresh_from_db()
    assert a.stock == 5
    assert CartItem.objects.filter(user=customer).count() == 1


def test_committed_order_that_cannot_be_read_back(customer, make_product, client_for, monkeypatch):
    a = make_product("10.00", stock=5)
    CartItem.objects.create(user=customer, product=a, quantity=2)

    def unreadable(order_id):
        raise Order.DoesNotExist()

    monkeypatch.setattr(services, "_load_order", unreadable)

    resp = client_for(customer).post("/api/cart/checkout")

    # 커밋은 이미 끝남: 재시도 대상이 아니라 order_id 로 보고
    assert resp.status_code == 500
    order = Order.objects.get()
    assert resp.json() == {"message": "订单创建成功但无法获取订单详情", "order_id": str(order.id)}
    a.refresh_from_db()
    assert a.stock == 3
    assert not CartItem.objects.filter(user=customer).exists()


def test_stock_drop_after_preflight_is_caught_by_guarded_decrement(customer, make_product, client_for, monkeypatch):
    a = make_product("10.00", stock=5)
    b = make_product("4.00", stock=5)
    CartItem.objects.create(user=customer, product=b, quantity=1)
    CartItem.objects.create(user=customer, product=a, quantity=2)

    preflight = services._unavailable

    def stock_drops_after_check(cart_items, products):
        result = preflight(cart_items, products)
        # 사전검사 통과 직후 다른 경로로 재고가 줄어든 상황
        Product.objects.filter(pk=a.pk).update(stock=1)
        return result

    monkeypatch.setattr(services, "_unavailable", stock_drops_after_check)

    resp = client_for(customer).post("/api/cart/checkout")

    assert resp.status_code == 400
    assert resp.json()["unavailable_products"] == [{
        "product_id": str(a.id),
        "product_name": a.name,
        "requested_quantity": 2,
        "available_stock": 1,
    }]
    assert Order.objects.count() == 0
    assert OrderItem.objects.count() == 0
    b.refresh_from_db()
    assert b.stock == 5
    assert CartItem.objects.filter(user=customer).count() == 2


def test_order_total_beyond_precision_is_rejected_before_writing(customer, make_product, client_for, admin):
    a = make_product("9999999.00", stock=10**6)
    CartItem.objects.create(user=customer, product=a, quantity=10**6)

    resp = client_for(customer).post("/api/cart/checkout")

    assert resp.status_code == 400
    assert resp.json()["message"] == "订单金额超出允许范围"
    assert Order.objects.count() == 0
    a.refresh_from_db()
    assert a.stock == 10**6
    assert CartItem.objects.filter(user=customer).count() == 1
    assert client_for(admin).get("/api/orders/all").json() == {"orders": []}
