from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import CanUseCart, IsAdmin, IsVendorOrAdmin

from . import orders, services
from .serializers import (
    AddToCartIn,
    CartItemOut,
    OrderOut,
    UpdateCartItemIn,
    UpdateOrderStatusIn,
    VendorOrderOut,
)


def _cart_change_response(change):
    if change.removed:
        return Response({"message": "已从购物车中删除项目", "removed": True})
    if change.created:
        return Response(
            {"message": "已添加到购物车", "cart_item": CartItemOut(change.item).data},
            status=status.HTTP_201_CREATED,
        )
    return Response({"message": "购物车已更新", "cart_item": CartItemOut(change.item).data})


# ---------------------------
# /api/cart
# ---------------------------
@api_view(["GET"])
@permission_classes([CanUseCart])
def cart_view(request):
    items, total = services.get_cart(request.user)
    return Response({"items": items, "total": total})


@api_view(["POST"])
@permission_classes([CanUseCart])
def add_to_cart_view(request):
    ser = AddToCartIn(data=request.data)
    ser.is_valid(raise_exception=True)
    change = services.add_to_cart(request.user, **ser.validated_data)
    return _cart_change_response(change)


@api_view(["PUT", "DELETE"])
@permission_classes([CanUseCart])
def cart_item_view(request, item_id):
    if request.method == "DELETE":
        services.remove_cart_item(request.user, item_id)
        return Response({"message": "已从购物车中删除项目"})

    ser = UpdateCartItemIn(data=request.data)
    ser.is_valid(raise_exception=True)
    change = services.update_cart_item(request.user, item_id, **ser.validated_data)
    return _cart_change_response(change)


@api_view(["POST"])
@permission_classes([CanUseCart])
def checkout_view(request):
    order = services.checkout(request.user)
    return Response(
        {"message": "订单创建成功", "order": OrderOut(order).data},
        status=status.HTTP_201_CREATED,
    )


# ---------------------------
# /api/orders
# ---------------------------
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def orders_view(request):
    return Response({"orders": OrderOut(orders.list_orders(request.user), many=True).data})


@api_view(["GET"])
@permission_classes([IsVendorOrAdmin])
def vendor_orders_view(request):
    return Response({"orders": VendorOrderOut(orders.vendor_orders(request.user), many=True).data})


@api_view(["GET"])
@permission_classes([IsAdmin])
def all_orders_view(request):
    return Response({"orders": OrderOut(orders.all_orders(), many=True).data})


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def order_detail_view(request, order_id):
    return Response(OrderOut(orders.get_order(request.user, order_id)).data)


@api_view(["PUT"])
@permission_classes([IsAuthenticated])
def order_status_view(request, order_id):
    ser = UpdateOrderStatusIn(data=request.data)
    ser.is_valid(raise_exception=True)
    new_status = orders.update_status(request.user, order_id, ser.validated_data["status"])
    return Response({"message": "订单状态已更新", "status": new_status.value})
