import pytest

from .models import AdminSettings, UserProfile

pytestmark = pytest.mark.django_db


def test_profile_is_created_on_first_read(customer, client_for):
    body = client_for(customer).get("/api/profile").json()

    assert body["email"] == customer.email
    assert body["role"] == "customer"
    assert body["username"] is None
    assert UserProfile.objects.filter(user=customer).count() == 1


def test_update_profile(vendor, client_for):
    c = client_for(vendor)
    resp = c.put("/api/profile", {"username": "kim", "birth_date": "1990-05-01"}, format="json")

    assert resp.status_code == 200
    assert resp.json()["profile"]["username"] == "kim"
    assert resp.json()["profile"]["birth_date"] == "1990-05-01"

    bad = c.put("/api/profile", {"birth_date": "yesterday"}, format="json")
    assert bad.status_code == 400


def test_vendor_profile(vendor, customer, client_for):
    assert client_for(customer).get("/api/vendor/profile").status_code == 403

    c = client_for(vendor)
    assert c.get("/api/vendor/profile").json()["accepts_returns"] is False

    resp = c.put("/api/vendor/profile", {"store_name": "Lamp House", "accepts_returns": True}, format="json")
    profile = resp.json()["profile"]
    assert profile["store_name"] == "Lamp House"
    assert profile["accepts_returns"] is True
    assert profile["vendor_id"] == str(vendor.id)


def test_admin_settings_defaults(admin, client_for):
    body = client_for(admin).get(f"/api/admin/settings/{admin.id}").json()

    assert body["site_name"] == "在线购物管理系统"
    assert body["items_per_page"] == 10
    assert body["tax_rate"] == 13.0
    assert body["payment_gateways"] == ["alipay", "wechatpay"]


def test_update_admin_settings(admin, client_for):
    resp = client_for(admin).put(
        f"/api/admin/settings/{admin.id}",
        {"theme": "dark", "payment_gateways": ["paypal"], "maintenance_mode": True},
        format="json",
    )

    settings = resp.json()["settings"]
    assert settings["theme"] == "dark"
    assert settings["payment_gateways"] == ["paypal"]
    assert AdminSettings.objects.get(admin=admin).payment_gateways == "paypal"


def test_admin_settings_are_private(admin, make_user, customer, client_for):
    other = make_user("admin")
    resp = client_for(other).get(f"/api/admin/settings/{admin.id}")
    assert resp.status_code == 403

    assert client_for(customer).get(f"/api/admin/settings/{customer.id}").status_code == 403


def test_gateway_names_cannot_contain_commas(admin, client_for):
    c = client_for(admin)
    url = f"/api/admin/settings/{admin.id}"

    resp = c.put(url, {"payment_gateways": ["alipay,paypal"]}, format="json")

    assert resp.status_code == 400
    assert "payment_gateways" in resp.json()["errors"]
    assert c.get(url).json()["payment_gateways"] == ["alipay", "wechatpay"]
