from __future__ import annotations

from rest_framework import viewsets

from apps.utils import api_success

from .mongo_models import User
from .mongo_serializers import UserSerializer
from .permissions import IsAdminRole

class AdminUserViewSet(viewsets.ViewSet):
    permission_classes = [IsAdminRole]

    def list(self, request):
        users = User.objects.order_by("-created_at")
        return api_success(UserSerializer(users, many=True).data)
