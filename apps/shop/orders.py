import logging

from django.db.models import Prefetch
from django.utils import timezone

from apps.core.exceptions import NotFound, PermissionDenied

from .exceptions import InvalidStatus
from .models import Order, OrderItem, OrderStatus

logger = logging.getLogger(__name__)

# 판매자는 처리중/배송중으로만 변경 가능
VENDOR_SETTABLE = frozenset({OrderStatus.PROCESSING, OrderStatus.SHIPPED})


def _with_items(qs):
    return qs.prefetch_related("items")


def list_orders(identity):
    qs = Order.objects.all()
    if not identity.is_admin:
        qs = qs.filter(user_id=identity.user_id)
    return _with_items(qs)


def all_orders():
    return _with_items(Order.objects.all())


def vendor_orders(identity):
    """판매자 상품이 포함된 주문. 각 주문에는 해당 판매자 항목만 vendor_items 로 붙음"""
    vendor_items = OrderItem.objects.filter(product__vendor_id=identity.user_id)
    return (Order.objects
            .filter(items__product__vendor_id=identity.user_id)
            .distinct()
            .prefetch_related(Prefetch("items", queryset=vendor_items, to_attr="vendor_items")))


def _contains_vendor_products(order, vendor_id) -> bool:
    return OrderItem.objects.filter(order=order, product__vendor_id=vendor_id).exists()


def _get(order_id) -> Order:
    try:
        return _with_items(Order.objects.all()).get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise NotFound("订单不存在")


def get_order(identity, order_id) -> Order:
    order = _get(order_id)
    if identity.is_admin or str(order.user_id) == str(identity.user_id):
        return order
    if identity.is_vendor:
        if _contains_vendor_products(order, identity.user_id):
            return order
        raise PermissionDenied("无权查看不包含您产品的订单")
    raise PermissionDenied("无权查看此订单")


def update_status(identity, order_id, new_status) -> OrderStatus:
    """
    상태 문자열 검증 → 주문 조회 → 권한 검사 순서.
    admin: 모든 상태 / vendor: 자기 상품이 있는 주문만, processing·shipped 만 / customer: 불가
    """
    try:
        status = OrderStatus.parse(new_status)
    except ValueError:
        raise InvalidStatus()

    order = _get(order_id)

    if identity.is_customer:
        logger.info(f"customer {identity.user_id} tried to set status on {order_id}")
        raise PermissionDenied("普通用户无权修改订单状态")

    if identity.is_vendor:
        if not _contains_vendor_products(order, identity.user_id):
            raise PermissionDenied("无权修改不包含您产品的订单")
        if status not in VENDOR_SETTABLE:
            raise PermissionDenied("商家只能将订单状态更改为 'processing' 或 'shipped'")

    # status 만 갱신 (주문항목/금액은 불변)
    Order.objects.filter(pk=order.pk).update(status=status, updated_at=timezone.now())
    logger.info(f"order {order.pk} status {order.status} -> {status.value} by {identity.role.value}")
    return status
