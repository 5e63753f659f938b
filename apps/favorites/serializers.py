from rest_framework import serializers

from .models import Favorite


class AddFavoriteIn(serializers.Serializer):
    product_id = serializers.UUIDField()


class FavoriteProductOut(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    vendor_id = serializers.CharField()
    stock = serializers.IntegerField()
    category = serializers.CharField(allow_null=True)


class FavoriteOut(serializers.ModelSerializer):
    user_id = serializers.CharField(read_only=True)
    product_id = serializers.CharField(read_only=True)

    class Meta:
        model = Favorite
        fields = ["id", "user_id", "product_id", "created_at"]


def favorite_payload(favorite, product) -> dict:
    data = FavoriteOut(favorite).data
    data["product"] = FavoriteProductOut(product).data if product is not None else None
    return data
