import logging

from apps.core.exceptions import NotFound, PermissionDenied

from .models import Product

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "description", "price", "stock", "category")


def list_products():
    return Product.objects.all()


def get_product(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValueError, TypeError):
        raise NotFound("产品不存在")


def vendor_products(identity):
    qs = Product.objects.all()
    if identity.is_admin:
        return qs
    return qs.filter(vendor_id=identity.user_id)


def create_product(identity, **data) -> Product:
    product = Product.objects.create(vendor_id=identity.user_id, **data)
    logger.info(f"product created: {product.id} by {identity.user_id}")
    return product


def _owned_product(identity, product_id) -> Product:
    product = get_product(product_id)
    if not identity.is_admin and str(product.vendor_id) != str(identity.user_id):
        raise PermissionDenied("无权修改此产品")
    return product


def update_product(identity, product_id, **data) -> Product:
    product = _owned_product(identity, product_id)
    changed = [f for f in EDITABLE_FIELDS if f in data]
    for f in changed:
        setattr(product, f, data[f])
    # price 변경은 기존 OrderItem.price 에 영향 없음 (구매 시점 가격 저장)
    product.save(update_fields=changed + ["updated_at"])
    return product


def delete_product(identity, product_id) -> None:
    product = _owned_product(identity, product_id)
    product.delete()
    logger.info(f"product deleted: {product_id} by {identity.user_id}")
