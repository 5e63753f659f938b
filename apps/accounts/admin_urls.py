from django.urls import path

from . import views

urlpatterns = [
    path("", views.users_view),
    path("/<uuid:user_id>", views.user_detail_view),
]
