from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response


@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    return Response({"status": "ok"})


urlpatterns = [
    path("", health_check),
    path("api/auth/", include("apps.accounts.urls")),
    path("api/admin/users", include("apps.accounts.admin_urls")),
    path("api/products", include("apps.catalog.urls")),
    path("api/cart", include("apps.shop.cart_urls")),
    path("api/orders", include("apps.shop.order_urls")),
    path("api/favorites", include("apps.favorites.urls")),
    path("", include("apps.profiles.urls")),
]
