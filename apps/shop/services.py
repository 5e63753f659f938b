import logging
from collections import defaultdict
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Optional

from django.db import DatabaseError, transaction
from django.db.models import F

from apps.catalog.models import MAX_QUANTITY, Product
from apps.catalog.services import get_product
from apps.core.exceptions import NotFound, ValidationFailed

from .exceptions import EmptyCart, InsufficientStock, OrderNotRetrievableAfterCommit, TransactionFailed
from .models import CartItem, Order, OrderItem, OrderStatus

logger = logging.getLogger(__name__)

# Order.total: max_digits=12, decimal_places=2
MAX_ORDER_TOTAL = Decimal("9999999999.99")


class CartChange(NamedTuple):
    item: Optional[CartItem]
    created: bool = False
    removed: bool = False


# ---------------------------
# 장바구니
# ---------------------------
def get_cart(identity) -> tuple[list[dict], Decimal]:
    items = list(CartItem.objects.filter(user_id=identity.user_id).order_by("created_at"))
    products = Product.objects.in_bulk([i.product_id for i in items])

    lines, total = [], Decimal("0.00")
    for item in items:
        product = products.get(item.product_id)
        if product is None:
            continue
        subtotal = product.price * item.quantity
        total += subtotal
        lines.append({
            "id": str(item.id),
            "product_id": str(product.id),
            "product_name": product.name,
            "product_price": product.price,
            "quantity": item.quantity,
            "subtotal": subtotal,
        })
    return lines, total


@transaction.atomic
def add_to_cart(identity, *, product_id, quantity: int) -> CartChange:
    get_product(product_id)

    # 조회 후 삽입: (user, product) 당 한 행
    item = (CartItem.objects.select_for_update()
            .filter(user_id=identity.user_id, product_id=product_id)
            .first())

    if item is None:
        if quantity <= 0:
            raise ValidationFailed("数量必须大于0")
        item = CartItem.objects.create(user_id=identity.user_id, product_id=product_id, quantity=quantity)
        return CartChange(item, created=True)

    new_quantity = item.quantity + quantity
    if new_quantity > MAX_QUANTITY:
        raise ValidationFailed("数量超出允许范围")
    if new_quantity <= 0:
        item.delete()
        return CartChange(None, removed=True)

    item.quantity = new_quantity
    item.save(update_fields=["quantity", "updated_at"])
    return CartChange(item)


def _own_cart_item(identity, item_id) -> CartItem:
    try:
        return CartItem.objects.select_for_update().get(pk=item_id, user_id=identity.user_id)
    except (CartItem.DoesNotExist, ValueError, TypeError):
        raise NotFound("购物车项目不存在或不属于当前用户")


@transaction.atomic
def update_cart_item(identity, item_id, *, quantity: int) -> CartChange:
    item = _own_cart_item(identity, item_id)
    if quantity <= 0:
        item.delete()
        return CartChange(None, removed=True)

    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    return CartChange(item)


@transaction.atomic
def remove_cart_item(identity, item_id) -> None:
    _own_cart_item(identity, item_id).delete()


# ---------------------------
# 결제: 장바구니 → 주문
# ---------------------------
def _unavailable(cart_items, products) -> list[dict]:
    requested = defaultdict(int)
    for item in cart_items:
        requested[item.product_id] += item.quantity

    unavailable = []
    for product_id, qty in requested.items():
        product = products.get(product_id)
        if product is None:
            unavailable.append({
                "product_id": str(product_id),
                "product_name": None,
                "requested_quantity": qty,
                "available_stock": 0,
                "message": "产品不存在",
            })
        elif product.stock < qty:
            unavailable.append({
                "product_id": str(product.id),
                "product_name": product.name,
                "requested_quantity": qty,
                "available_stock": product.stock,
            })
    return unavailable


def _place_order(user_id) -> Order:
    cart_items = list(CartItem.objects.filter(user_id=user_id).order_by("created_at"))
    if not cart_items:
        raise EmptyCart()

    # 잠금 순서 고정(pk 정렬) → 동시 결제 간 데드락 예방
    product_ids = sorted({i.product_id for i in cart_items}, key=str)
    products = {p.pk: p for p in Product.objects.select_for_update().filter(pk__in=product_ids).order_by("pk")}

    unavailable = _unavailable(cart_items, products)
    if unavailable:
        # 사전검사: 아직 아무것도 쓰지 않음
        raise InsufficientStock(unavailable)

    total = Decimal("0.00")
    lines = []
    for item in cart_items:
        product = products[item.product_id]
        total += product.price * item.quantity
        lines.append((item, product))

    if total > MAX_ORDER_TOTAL:
        raise ValidationFailed("订单金额超出允许范围")

    order = Order.objects.create(user_id=user_id, total=total, status=OrderStatus.PENDING)
    OrderItem.objects.bulk_create([
        OrderItem(order=order, product_id=product.pk, quantity=item.quantity, price=product.price)
        for item, product in lines
    ])

    for item, product in lines:
        # F-표현식 → DB 측 원자적 차감. 조건부 update 로 초과판매 차단
        updated = (Product.objects
                   .filter(pk=product.pk, stock__gte=item.quantity)
                   .update(stock=F("stock") - item.quantity))
        if updated != 1:
            current = Product.objects.filter(pk=product.pk).values_list("stock", flat=True).first()
            raise InsufficientStock([{
                "product_id": str(product.pk),
                "product_name": product.name,
                "requested_quantity": item.quantity,
                "available_stock": current or 0,
            }])

    _clear_cart(user_id)

    order_id = order.pk
    transaction.on_commit(lambda: logger.info(f"order committed: {order_id} total={total}"))
    return order


def _clear_cart(user_id) -> None:
    CartItem.objects.filter(user_id=user_id).delete()


def _load_order(order_id) -> Order:
    return Order.objects.prefetch_related("items").get(pk=order_id)


def checkout(identity) -> Order:
    """
    장바구니 전체를 하나의 주문으로 변환.
    성공: 주문 + 주문항목 생성, 재고 차감, 장바구니 비움 (모두 한 트랜잭션)
    실패: 아무것도 남지 않음
    """
    user_id = identity.user_id
    try:
        with transaction.atomic():
            order = _place_order(user_id)
    except InsufficientStock as e:
        logger.warning(f"checkout rejected for {user_id}: {len(e.items)} unavailable item(s)")
        raise
    except DatabaseError as e:
        logger.exception(f"checkout transaction failed for {user_id}")
        raise TransactionFailed() from e

    try:
        return _load_order(order.pk)
    except (Order.DoesNotExist, DatabaseError, InvalidOperation) as e:
        logger.exception(f"order {order.pk} committed but could not be read back")
        raise OrderNotRetrievableAfterCommit(order.pk) from e
