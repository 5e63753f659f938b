import pytest
from django.contrib.auth import get_user_model

from apps.shop.models import Order

pytestmark = pytest.mark.django_db


def test_only_admin_manages_users(customer, vendor, client_for):
    for user in (customer, vendor):
        resp = client_for(user).get("/api/admin/users")
        assert resp.status_code == 403
        assert resp.json()["message"] == "只有管理员可以访问此资源"


def test_create_list_update_user(admin, client_for):
    c = client_for(admin)

    created = c.post(
        "/api/admin/users", {"email": "shop@test.com", "password": "secret123", "role": "Vendor"}, format="json"
    )
    assert created.status_code == 201
    assert created.json()["role"] == "vendor"
    user_id = created.json()["id"]

    emails = [u["email"] for u in c.get("/api/admin/users").json()]
    assert "shop@test.com" in emails

    updated = c.put(f"/api/admin/users/{user_id}", {"role": "customer"}, format="json")
    assert updated.json()["role"] == "customer"

    bad = c.put(f"/api/admin/users/{user_id}", {"role": "overlord"}, format="json")
    assert bad.status_code == 400


def test_admin_cannot_delete_self(admin, client_for):
    resp = client_for(admin).delete(f"/api/admin/users/{admin.id}")
    assert resp.status_code == 403
    assert get_user_model().objects.filter(pk=admin.pk).exists()


def test_delete_user(admin, customer, client_for):
    resp = client_for(admin).delete(f"/api/admin/users/{customer.id}")
    assert resp.json() == {"success": True, "message": "用户已删除"}
    assert not get_user_model().objects.filter(pk=customer.pk).exists()


def test_user_with_orders_is_kept(admin, customer, client_for):
    Order.objects.create(user=customer)
    resp = client_for(admin).delete(f"/api/admin/users/{customer.id}")
    assert resp.status_code == 400
    assert resp.json()["message"] == "该用户存在订单记录，无法删除"
