import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="UserProfile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("username", models.CharField(blank=True, max_length=100, null=True)),
                ("phone", models.CharField(blank=True, max_length=30, null=True)),
                ("address", models.TextField(blank=True, null=True)),
                ("avatar_url", models.CharField(blank=True, max_length=500, null=True)),
                ("gender", models.CharField(blank=True, max_length=20, null=True)),
                ("birth_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "user_profiles",
            },
        ),
        migrations.CreateModel(
            name="VendorProfile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("store_name", models.CharField(blank=True, max_length=255, null=True)),
                ("store_description", models.TextField(blank=True, null=True)),
                ("contact_email", models.CharField(blank=True, max_length=255, null=True)),
                ("contact_phone", models.CharField(blank=True, max_length=30, null=True)),
                ("store_address", models.TextField(blank=True, null=True)),
                ("store_logo_url", models.CharField(blank=True, max_length=500, null=True)),
                ("store_banner_url", models.CharField(blank=True, max_length=500, null=True)),
                ("business_hours", models.CharField(blank=True, max_length=255, null=True)),
                ("accepts_returns", models.BooleanField(default=False)),
                ("return_policy", models.TextField(blank=True, null=True)),
                ("shipping_methods", models.TextField(blank=True, null=True)),
                ("payment_methods", models.TextField(blank=True, null=True)),
                ("notification_settings", models.TextField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "vendor",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vendor_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "vendor_profiles",
            },
        ),
        migrations.CreateModel(
            name="AdminSettings",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("site_name", models.CharField(default="在线购物管理系统", max_length=255)),
                ("site_description", models.TextField(default="在线购物管理系统")),
                ("contact_email", models.CharField(default="admin@example.com", max_length=255)),
                ("order_prefix", models.CharField(default="ORD-", max_length=20)),
                ("items_per_page", models.PositiveIntegerField(default=10)),
                ("allow_registration", models.BooleanField(default=True)),
                ("maintenance_mode", models.BooleanField(default=False)),
                ("theme", models.CharField(default="light", max_length=20)),
                ("currency_symbol", models.CharField(default="¥", max_length=8)),
                ("tax_rate", models.DecimalField(decimal_places=2, default=Decimal("13.00"), max_digits=5)),
                ("payment_gateways", models.TextField(default="alipay,wechatpay")),
                ("log_level", models.CharField(default="info", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "admin",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="admin_settings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "admin_profiles",
            },
        ),
    ]
