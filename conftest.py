from decimal import Decimal
from itertools import count

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from apps.accounts.authentication import Identity
from apps.accounts.models import Role
from apps.accounts.tokens import issue_token
from apps.catalog.models import Product

_seq = count(1)


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    # bcrypt 는 테스트에서 너무 느림
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def make_user():
    def _make(role=Role.CUSTOMER, email=None, password="secret123"):
        email = email or f"{Role.parse(role).value}{next(_seq)}@test.com"
        return get_user_model().objects.create_user(email, password, role=role)
    return _make


@pytest.fixture
def customer(make_user):
    return make_user(Role.CUSTOMER)


@pytest.fixture
def vendor(make_user):
    return make_user(Role.VENDOR)


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN)


@pytest.fixture
def make_product(vendor):
    def _make(price="10.00", stock=5, name=None, owner=None):
        return Product.objects.create(
            name=name or f"product-{next(_seq)}",
            price=Decimal(price),
            stock=stock,
            vendor=owner or vendor,
        )
    return _make


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    """해당 사용자의 JWT 를 실은 APIClient"""

    def _client(user):
        c = APIClient()
        c.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")
        return c
    return _client


@pytest.fixture
def identity_of():
    def _identity(user):
        return Identity(user_id=str(user.pk), role=Role.parse(user.role), email=user.email)
    return _identity
