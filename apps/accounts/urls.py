from django.urls import path

from . import views

urlpatterns = [
    path("register", views.register_view),
    path("login", views.login_view),
    path("me", views.me_view),
    path("password", views.change_password_view),
]
