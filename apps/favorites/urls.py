from django.urls import path

from . import views

urlpatterns = [
    path("", views.favorites_view),
    path("/check/<uuid:product_id>", views.check_favorite_view),
    path("/<uuid:product_id>", views.favorite_detail_view),
]
