from rest_framework.permissions import BasePermission

from .models import Role


def HasRole(*roles, message="无权访问此资源"):
    allowed = frozenset(Role.parse(r) for r in roles)

    class _HasRole(BasePermission):
        def has_permission(self, request, view):
            user = request.user
            return bool(user and user.is_authenticated and getattr(user, "role", None) in allowed)

    _HasRole.message = message
    _HasRole.__name__ = "HasRole_" + "_".join(sorted(r.value for r in allowed))
    return _HasRole


class CanUseCart(BasePermission):
    """관리자는 구매자가 아니므로 장바구니/결제 전체 차단"""

    message = "管理员不能使用购物车功能"

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and getattr(user, "role", None) is not Role.ADMIN)


IsAdmin = HasRole(Role.ADMIN, message="只有管理员可以访问此资源")
IsVendorOrAdmin = HasRole(Role.VENDOR, Role.ADMIN)
