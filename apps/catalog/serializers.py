from decimal import Decimal

from rest_framework import serializers

from .models import MAX_QUANTITY, Product


class ProductIn(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, required=False, default="")
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    stock = serializers.IntegerField(min_value=0, max_value=MAX_QUANTITY)
    category = serializers.CharField(max_length=100, allow_null=True, allow_blank=True, required=False, default=None)


class ProductOut(serializers.ModelSerializer):
    vendor_id = serializers.CharField(read_only=True)
    in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "vendor_id",
            "stock",
            "created_at",
            "updated_at",
            "category",
            "in_stock",
        ]
