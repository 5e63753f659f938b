from decimal import Decimal

from rest_framework import serializers

from apps.catalog.models import MAX_QUANTITY

from .models import CartItem, Order, OrderItem


class AddToCartIn(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=-MAX_QUANTITY, max_value=MAX_QUANTITY)


class UpdateCartItemIn(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=-MAX_QUANTITY, max_value=MAX_QUANTITY)


class UpdateOrderStatusIn(serializers.Serializer):
    status = serializers.CharField(allow_blank=True)


class CartItemOut(serializers.ModelSerializer):
    user_id = serializers.CharField(read_only=True)
    product_id = serializers.CharField(read_only=True)

    class Meta:
        model = CartItem
        fields = ["id", "user_id", "product_id", "quantity", "created_at", "updated_at"]


class OrderItemOut(serializers.ModelSerializer):
    product_id = serializers.CharField(read_only=True)

    class Meta:
        model = OrderItem
        fields = ["id", "product_id", "quantity", "price"]


class OrderOut(serializers.ModelSerializer):
    user_id = serializers.CharField(read_only=True)
    items = OrderItemOut(many=True, read_only=True)

    class Meta:
        model = Order
        fields = ["id", "user_id", "total", "status", "items", "created_at", "updated_at"]


class VendorOrderOut(OrderOut):
    """판매자 항목만 노출, total 도 그 항목들로 재계산"""

    items = OrderItemOut(source="vendor_items", many=True, read_only=True)
    total = serializers.SerializerMethodField()

    def get_total(self, order) -> Decimal:
        return sum((i.price * i.quantity for i in order.vendor_items), Decimal("0.00"))
