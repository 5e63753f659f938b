from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import SAFE_METHODS, BasePermission
from rest_framework.response import Response

from apps.accounts.permissions import IsVendorOrAdmin

from . import services
from .serializers import ProductIn, ProductOut


class PublicReadVendorWrite(BasePermission):
    message = IsVendorOrAdmin.message

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return IsVendorOrAdmin().has_permission(request, view)


@api_view(["GET", "POST"])
@permission_classes([PublicReadVendorWrite])
def products_view(request):
    if request.method == "GET":
        products = list(services.list_products())
        return Response({"products": ProductOut(products, many=True).data, "total": len(products)})

    ser = ProductIn(data=request.data)
    ser.is_valid(raise_exception=True)
    product = services.create_product(request.user, **ser.validated_data)
    return Response(ProductOut(product).data, status=status.HTTP_201_CREATED)


@api_view(["GET", "PUT", "DELETE"])
@permission_classes([PublicReadVendorWrite])
def product_detail_view(request, product_id):
    if request.method == "GET":
        return Response(ProductOut(services.get_product(product_id)).data)

    if request.method == "PUT":
        ser = ProductIn(data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        product = services.update_product(request.user, product_id, **ser.validated_data)
        return Response(ProductOut(product).data)

    services.delete_product(request.user, product_id)
    return Response({"message": "产品已删除"})


@api_view(["GET"])
@permission_classes([IsVendorOrAdmin])
def vendor_products_view(request):
    products = services.vendor_products(request.user)
    return Response(ProductOut(products, many=True).data)
