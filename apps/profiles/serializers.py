from rest_framework import serializers

from .models import AdminSettings, UserProfile, VendorProfile


class UserProfileIn(serializers.Serializer):
    username = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    phone = serializers.CharField(max_length=30, required=False, allow_null=True, allow_blank=True)
    address = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    avatar_url = serializers.CharField(max_length=500, required=False, allow_null=True, allow_blank=True)
    gender = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)
    birth_date = serializers.DateField(required=False, allow_null=True)


class UserProfileOut(serializers.ModelSerializer):
    user_id = serializers.CharField(read_only=True)
    email = serializers.CharField(source="user.email", read_only=True)
    role = serializers.CharField(source="user.role", read_only=True)

    class Meta:
        model = UserProfile
        fields = [
            "id", "user_id", "email", "role", "username", "phone", "address",
            "avatar_url", "gender", "birth_date", "created_at", "updated_at",
        ]


VENDOR_TEXT_FIELDS = [
    "store_name", "store_description", "contact_email", "contact_phone", "store_address",
    "store_logo_url", "store_banner_url", "business_hours", "return_policy",
    "shipping_methods", "payment_methods", "notification_settings",
]


class VendorProfileIn(serializers.Serializer):
    accepts_returns = serializers.BooleanField(required=False)

    def get_fields(self):
        fields = super().get_fields()
        for name in VENDOR_TEXT_FIELDS:
            fields[name] = serializers.CharField(required=False, allow_null=True, allow_blank=True)
        return fields


class VendorProfileOut(serializers.ModelSerializer):
    vendor_id = serializers.CharField(read_only=True)

    class Meta:
        model = VendorProfile
        fields = ["id", "vendor_id", *VENDOR_TEXT_FIELDS, "accepts_returns", "created_at", "updated_at"]


class AdminSettingsIn(serializers.Serializer):
    site_name = serializers.CharField(max_length=255, required=False)
    site_description = serializers.CharField(required=False, allow_blank=True)
    contact_email = serializers.EmailField(required=False)
    order_prefix = serializers.CharField(max_length=20, required=False, allow_blank=True)
    items_per_page = serializers.IntegerField(min_value=1, required=False)
    allow_registration = serializers.BooleanField(required=False)
    maintenance_mode = serializers.BooleanField(required=False)
    theme = serializers.CharField(max_length=20, required=False)
    currency_symbol = serializers.CharField(max_length=8, required=False)
    tax_rate = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=0, required=False)
    # 콤마 구분으로 저장하므로 이름에 콤마 불가
    payment_gateways = serializers.ListField(
        child=serializers.RegexField(r"^[^,]+$", error_messages={"invalid": "支付网关名称不能包含逗号"}),
        required=False,
    )
    log_level = serializers.ChoiceField(choices=["debug", "info", "warn", "error"], required=False)


class AdminSettingsOut(serializers.ModelSerializer):
    admin_id = serializers.CharField(read_only=True)
    payment_gateways = serializers.ListField(source="gateways", child=serializers.CharField(), read_only=True)

    class Meta:
        model = AdminSettings
        fields = [
            "id", "admin_id", "site_name", "site_description", "contact_email", "order_prefix",
            "items_per_page", "allow_registration", "maintenance_mode", "theme", "currency_symbol",
            "tax_rate", "payment_gateways", "log_level", "created_at", "updated_at",
        ]
