from django.urls import path

from . import views

urlpatterns = [
    path("", views.orders_view),
    path("/vendor", views.vendor_orders_view),
    path("/all", views.all_orders_view),
    path("/<uuid:order_id>", views.order_detail_view),
    path("/<uuid:order_id>/status", views.order_status_view),
]
