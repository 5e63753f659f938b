from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from . import services
from .permissions import IsAdmin
from .serializers import (
    AdminCreateUserIn,
    AdminUpdateUserIn,
    AdminUserOut,
    ChangePasswordIn,
    CredentialsIn,
    RegisterIn,
    UserOut,
)


@api_view(["POST"])
@permission_classes([AllowAny])
def register_view(request):
    ser = RegisterIn(data=request.data)
    ser.is_valid(raise_exception=True)
    user, token = services.register(**ser.validated_data)
    return Response({"user": UserOut(user).data, "token": token}, status=status.HTTP_201_CREATED)


@api_view(["POST"])
@permission_classes([AllowAny])
def login_view(request):
    ser = CredentialsIn(data=request.data)
    ser.is_valid(raise_exception=True)
    user, token = services.login(**ser.validated_data)
    return Response({"user": UserOut(user).data, "token": token})


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def me_view(request):
    user = services.get_user(request.user.user_id)
    return Response(UserOut(user).data)


@api_view(["PUT"])
@permission_classes([IsAuthenticated])
def change_password_view(request):
    ser = ChangePasswordIn(data=request.data)
    ser.is_valid(raise_exception=True)
    services.change_password(request.user, **ser.validated_data)
    return Response({"message": "密码更新成功"})


@api_view(["GET", "POST"])
@permission_classes([IsAdmin])
def users_view(request):
    if request.method == "GET":
        return Response(AdminUserOut(services.list_users(), many=True).data)

    ser = AdminCreateUserIn(data=request.data)
    ser.is_valid(raise_exception=True)
    user = services.create_user(**ser.validated_data)
    return Response(AdminUserOut(user).data, status=status.HTTP_201_CREATED)


@api_view(["GET", "PUT", "DELETE"])
@permission_classes([IsAdmin])
def user_detail_view(request, user_id):
    if request.method == "GET":
        return Response(AdminUserOut(services.get_user(user_id)).data)

    if request.method == "PUT":
        ser = AdminUpdateUserIn(data=request.data)
        ser.is_valid(raise_exception=True)
        user = services.update_user(user_id, **ser.validated_data)
        return Response(AdminUserOut(user).data)

    services.delete_user(request.user, user_id)
    return Response({"success": True, "message": "用户已删除"})
