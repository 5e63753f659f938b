from django.urls import path

from . import views

urlpatterns = [
    path("", views.cart_view),
    path("/add", views.add_to_cart_view),
    path("/checkout", views.checkout_view),
    path("/<uuid:item_id>", views.cart_item_view),
]
