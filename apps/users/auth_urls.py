from django.urls import re_path

from .auth_views_mongo import (
    AdminLoginView,
    LoginView,
    LogoutView,
    ProfileView,
    RegisterView,
)

urlpatterns = [
    re_path(r"^register/?$", RegisterView.as_view(), name="auth-register"),
    re_path(r"^login/?$", LoginView.as_view(), name="auth-login"),
    re_path(r"^admin/login/?$", AdminLoginView.as_view(), name="auth-admin-login"),
    re_path(r"^profile/?$", ProfileView.as_view(), name="auth-profile"),
    re_path(r"^logout/?$", LogoutView.as_view(), name="auth-logout"),
]
