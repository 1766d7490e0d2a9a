from __future__ import annotations

import logging

from rest_framework import permissions, status
from rest_framework.views import APIView

from apps.utils import api_error, api_success

from .authentication import issue_token, revoke_credential
from .mongo_models import User
from .mongo_serializers import LoginSerializer, RegisterSerializer, UserSerializer
from .permissions import IsAuthenticatedUser

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"

class LoginView(APIView):

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []
    admin_only = False

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = User.objects(email=serializer.validated_data["email"]).first()
        if user is None or not user.check_password(serializer.validated_data["password"]):
            logger.info("Failed login for %s", serializer.validated_data["email"])
            return api_error(INVALID_CREDENTIALS, status_code=status.HTTP_401_UNAUTHORIZED)

        if not user.is_active:
            return api_error("Account has been disabled", status_code=status.HTTP_401_UNAUTHORIZED)

        if self.admin_only and not user.is_admin:
            return api_error("Not authorized as an admin", status_code=status.HTTP_403_FORBIDDEN)

        logger.info("User %s logged in", user.id)
        return api_success(
            {
                "user": UserSerializer(user).data,
                "token": issue_token(user),
            }
        )

class AdminLoginView(LoginView):
    admin_only = True

class RegisterView(APIView):

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def post(self, request, *args, **kwargs):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("Registered user %s", user.id)
        return api_success(
            {
                "user": UserSerializer(user).data,
                "token": issue_token(user),
            },
            status_code=status.HTTP_201_CREATED,
        )

class ProfileView(APIView):

    permission_classes = [IsAuthenticatedUser]

    def get(self, request, *args, **kwargs):
        return api_success({"user": UserSerializer(request.user).data})

class LogoutView(APIView):

    permission_classes = [IsAuthenticatedUser]

    def post(self, request, *args, **kwargs):
        revoke_credential(request.auth)
        return api_success({"message": "Logged out"})
