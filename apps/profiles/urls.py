from django.urls import path

from . import views

urlpatterns = [
    path("api/profile", views.profile_view),
    path("api/vendor/profile", views.vendor_profile_view),
    path("api/admin/settings/<uuid:user_id>", views.admin_settings_view),
]
