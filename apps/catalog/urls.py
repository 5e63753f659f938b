from django.urls import path

from . import views

urlpatterns = [
    path("", views.products_view),
    path("/vendor", views.vendor_products_view),
    path("/<uuid:product_id>", views.product_detail_view),
]
