import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class UserProfile(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="profile")
    username = models.CharField(max_length=100, blank=True, null=True)
    phone = models.CharField(max_length=30, blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    avatar_url = models.CharField(max_length=500, blank=True, null=True)
    gender = models.CharField(max_length=20, blank=True, null=True)
    birth_date = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "user_profiles"


class VendorProfile(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vendor = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="vendor_profile")
    store_name = models.CharField(max_length=255, blank=True, null=True)
    store_description = models.TextField(blank=True, null=True)
    contact_email = models.CharField(max_length=255, blank=True, null=True)
    contact_phone = models.CharField(max_length=30, blank=True, null=True)
    store_address = models.TextField(blank=True, null=True)
    store_logo_url = models.CharField(max_length=500, blank=True, null=True)
    store_banner_url = models.CharField(max_length=500, blank=True, null=True)
    business_hours = models.CharField(max_length=255, blank=True, null=True)
    accepts_returns = models.BooleanField(default=False)
    return_policy = models.TextField(blank=True, null=True)
    shipping_methods = models.TextField(blank=True, null=True)
    payment_methods = models.TextField(blank=True, null=True)
    notification_settings = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "vendor_profiles"


class AdminSettings(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    admin = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="admin_settings")
    site_name = models.CharField(max_length=255, default="在线购物管理系统")
    site_description = models.TextField(default="在线购物管理系统")
    contact_email = models.CharField(max_length=255, default="admin@example.com")
    order_prefix = models.CharField(max_length=20, default="ORD-")
    items_per_page = models.PositiveIntegerField(default=10)
    allow_registration = models.BooleanField(default=True)
    maintenance_mode = models.BooleanField(default=False)
    theme = models.CharField(max_length=20, default="light")
    currency_symbol = models.CharField(max_length=8, default="¥")
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("13.00"))
    # 콤마 구분 문자열로 저장, API 에서는 리스트
    payment_gateways = models.TextField(default="alipay,wechatpay")
    log_level = models.CharField(max_length=10, default="info")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "admin_profiles"

    @property
    def gateways(self) -> list[str]:
        return [g for g in self.payment_gateways.split(",") if g]
