from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.models import Role
from apps.accounts.permissions import HasRole, IsAdmin

from . import services
from .serializers import (
    AdminSettingsIn,
    AdminSettingsOut,
    UserProfileIn,
    UserProfileOut,
    VendorProfileIn,
    VendorProfileOut,
)

IsVendor = HasRole(Role.VENDOR, message="只有商家可以访问店铺资料")


@api_view(["GET", "PUT"])
@permission_classes([IsAuthenticated])
def profile_view(request):
    if request.method == "GET":
        return Response(UserProfileOut(services.get_user_profile(request.user)).data)

    ser = UserProfileIn(data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    profile = services.update_user_profile(request.user, ser.validated_data)
    return Response({"message": "个人资料已更新", "profile": UserProfileOut(profile).data})


@api_view(["GET", "PUT"])
@permission_classes([IsVendor])
def vendor_profile_view(request):
    if request.method == "GET":
        return Response(VendorProfileOut(services.get_vendor_profile(request.user)).data)

    ser = VendorProfileIn(data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    profile = services.update_vendor_profile(request.user, ser.validated_data)
    return Response({"message": "店铺资料已更新", "profile": VendorProfileOut(profile).data})


@api_view(["GET", "PUT"])
@permission_classes([IsAdmin])
def admin_settings_view(request, user_id):
    if request.method == "GET":
        return Response(AdminSettingsOut(services.get_admin_settings(request.user, user_id)).data)

    ser = AdminSettingsIn(data=request.data, partial=True)
    ser.is_valid(raise_exception=True)
    settings = services.update_admin_settings(request.user, user_id, ser.validated_data)
    return Response({"message": "系统设置已更新", "settings": AdminSettingsOut(settings).data})
