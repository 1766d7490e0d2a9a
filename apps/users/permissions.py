from __future__ import annotations

from rest_framework import permissions

from .authentication import Credential

class IsAuthenticatedUser(permissions.BasePermission):

    def has_permission(self, request, view):
        return isinstance(request.auth, Credential)

class IsAdminRole(IsAuthenticatedUser):
    message = "Not authorized as an admin"

    def has_permission(self, request, view):
        return super().has_permission(request, view) and request.auth.is_admin
