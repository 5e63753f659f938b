from datetime import datetime, timedelta, timezone

import jwt
import pytest
from django.conf import settings
from django.contrib.auth import get_user_model

from apps.core.exceptions import ValidationFailed

from . import services
from .models import Role
from .tokens import TokenError, decode_token, issue_token

pytestmark = pytest.mark.django_db


def _token(**overrides):
    now = datetime.now(timezone.utc)
    claims = {"sub": "x", "role": "customer", "iat": now, "exp": now + timedelta(hours=1), **overrides}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def test_register_returns_user_and_token(api_client):
    resp = api_client.post("/api/auth/register", {"email": "u@test.com", "password": "secret123"}, format="json")

    assert resp.status_code == 201
    body = resp.json()
    assert body["user"]["email"] == "u@test.com"
    assert body["user"]["role"] == "customer"
    assert decode_token(body["token"])["role"] is Role.CUSTOMER


def test_register_duplicate_email(api_client):
    get_user_model().objects.create_user("u@test.com", "pw")

    with pytest.raises(ValidationFailed):
        services.register(email="U@test.com", password="secret123")

    resp = api_client.post("/api/auth/register", {"email": "u@test.com", "password": "secret123"}, format="json")
    assert resp.status_code == 400
    assert resp.json()["message"] == "该邮箱已被注册"


def test_register_validates_input(api_client):
    resp = api_client.post("/api/auth/register", {"email": "not-an-email", "password": "x"}, format="json")
    assert resp.status_code == 400
    assert "email" in resp.json()["errors"]


def test_login(api_client, make_user):
    make_user(email="v@test.com", role=Role.VENDOR)

    ok = api_client.post("/api/auth/login", {"email": "v@test.com", "password": "secret123"}, format="json")
    assert ok.status_code == 200
    assert ok.json()["user"]["role"] == "vendor"

    bad = api_client.post("/api/auth/login", {"email": "v@test.com", "password": "wrong"}, format="json")
    assert bad.status_code == 401
    assert bad.json()["message"] == "电子邮件或密码无效"


def test_me(customer, client_for, api_client):
    resp = client_for(customer).get("/api/auth/me")
    assert resp.json() == {"id": str(customer.id), "email": customer.email, "role": "customer"}

    assert api_client.get("/api/auth/me").status_code == 401


def test_unknown_role_in_token_is_rejected(api_client):
    # Customer 로 대체하지 않음
    with pytest.raises(TokenError):
        decode_token(_token(role="superuser"))

    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {_token(role='superuser')}")
    assert api_client.get("/api/auth/me").status_code == 401


def test_role_claim_is_case_insensitive():
    assert decode_token(_token(role="Vendor"))["role"] is Role.VENDOR


def test_expired_and_malformed_tokens(api_client):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    with pytest.raises(TokenError):
        decode_token(_token(iat=past, exp=past + timedelta(minutes=1)))

    api_client.credentials(HTTP_AUTHORIZATION="Token abc")
    resp = api_client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid authorization header format"


def test_issued_token_carries_identity(vendor):
    claims = decode_token(issue_token(vendor))
    assert claims["sub"] == str(vendor.id)
    assert claims["email"] == vendor.email
    assert claims["exp"] > claims["iat"]


def test_change_password(customer, client_for):
    c = client_for(customer)

    wrong = c.put("/api/auth/password", {"old_password": "nope", "new_password": "another1"}, format="json")
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "旧密码不正确"

    short = c.put("/api/auth/password", {"old_password": "secret123", "new_password": "abc"}, format="json")
    assert short.status_code == 400

    ok = c.put("/api/auth/password", {"old_password": "secret123", "new_password": "another1"}, format="json")
    assert ok.json() == {"message": "密码更新成功"}
    customer.refresh_from_db()
    assert customer.check_password("another1")
