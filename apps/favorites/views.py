from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from apps.accounts.models import Role
from apps.accounts.permissions import HasRole

from . import services
from .serializers import AddFavoriteIn, FavoriteOut, favorite_payload

IsCustomer = HasRole(Role.CUSTOMER, message="只有普通用户可以使用收藏功能")


@api_view(["GET", "POST"])
@permission_classes([IsCustomer])
def favorites_view(request):
    if request.method == "GET":
        pairs = services.list_favorites(request.user)
        return Response({"favorites": [favorite_payload(f, p) for f, p in pairs]})

    ser = AddFavoriteIn(data=request.data)
    ser.is_valid(raise_exception=True)
    favorite = services.add_favorite(request.user, ser.validated_data["product_id"])
    return Response(
        {"message": "商品已添加到收藏夹", "favorite": FavoriteOut(favorite).data},
        status=status.HTTP_201_CREATED,
    )


@api_view(["DELETE"])
@permission_classes([IsCustomer])
def favorite_detail_view(request, product_id):
    services.remove_favorite(request.user, product_id)
    return Response({"message": "商品已从收藏夹移除"})


@api_view(["GET"])
@permission_classes([IsCustomer])
def check_favorite_view(request, product_id):
    return Response({"is_favorite": services.is_favorite(request.user, product_id)})
