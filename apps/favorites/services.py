from apps.catalog.models import Product
from apps.catalog.services import get_product
from apps.core.exceptions import NotFound, ValidationFailed

from .models import Favorite


def list_favorites(identity) -> list[tuple]:
    favorites = list(Favorite.objects.filter(user_id=identity.user_id))
    products = Product.objects.in_bulk([f.product_id for f in favorites])
    return [(f, products.get(f.product_id)) for f in favorites]


def add_favorite(identity, product_id) -> Favorite:
    get_product(product_id)
    if Favorite.objects.filter(user_id=identity.user_id, product_id=product_id).exists():
        raise ValidationFailed("该商品已经在收藏夹中")
    return Favorite.objects.create(user_id=identity.user_id, product_id=product_id)


def remove_favorite(identity, product_id) -> None:
    deleted, _ = Favorite.objects.filter(user_id=identity.user_id, product_id=product_id).delete()
    if not deleted:
        raise NotFound("收藏夹中未找到该商品")


def is_favorite(identity, product_id) -> bool:
    return Favorite.objects.filter(user_id=identity.user_id, product_id=product_id).exists()
