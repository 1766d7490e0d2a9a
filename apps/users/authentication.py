from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from rest_framework import exceptions
from rest_framework.request import Request
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from .mongo_models import ROLE_ADMIN, ROLE_USER, RevokedToken, User

logger = logging.getLogger(__name__)

ROLE_CLAIM = "role"

@dataclass(frozen=True)
class Credential:
    """Decoded bearer token attached to ``request.auth`` once a request is authenticated."""

    user_id: str
    role: str
    jti: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_token(cls, validated_token) -> "Credential":
        try:
            return cls(
                user_id=str(validated_token[api_settings.USER_ID_CLAIM]),
                role=validated_token.get(ROLE_CLAIM, ROLE_USER),
                jti=str(validated_token[api_settings.JTI_CLAIM]),
                expires_at=datetime.fromtimestamp(validated_token["exp"], tz=timezone.utc),
            )
        except KeyError as exc:
            raise InvalidToken(f"Token does not contain {exc.args[0]}")

def issue_token(user: User) -> str:
    token = AccessToken.for_user(user)
    token[ROLE_CLAIM] = user.role
    return str(token)

def revoke_credential(credential: Credential) -> None:
    if RevokedToken.is_revoked(credential.jti):
        return
    RevokedToken(
        jti=credential.jti,
        user_id=ObjectId(credential.user_id),
        expires_at=credential.expires_at,
    ).save()
    logger.info("Revoked token %s for user %s", credential.jti, credential.user_id)

class MongoEngineJWTAuthentication(JWTAuthentication):
    """Bearer-token authentication backed by the MongoDB user collection.

    A request ends up either unauthenticated (no ``Authorization`` header) or
    authenticated as ``(User, Credential)``. A bad signature, an expired token,
    a revoked ``jti`` or a missing/disabled user all fail with 401.
    """

    def authenticate(self, request: Request) -> Optional[Tuple[User, Credential]]:
        header = self.get_header(request)
        if header is None:
            return None

        raw_token = self.get_raw_token(header)
        if raw_token is None:
            return None

        validated_token = self.get_validated_token(raw_token)
        credential = Credential.from_token(validated_token)
        if RevokedToken.is_revoked(credential.jti):
            raise exceptions.AuthenticationFailed("Token has been revoked")

        return self.get_user(validated_token), credential

    def get_user(self, validated_token):
        try:
            user_id = ObjectId(str(validated_token[api_settings.USER_ID_CLAIM]))
        except KeyError:
            raise InvalidToken("Token does not contain user_id")
        except InvalidId:
            raise exceptions.AuthenticationFailed("User does not exist")

        user = User.objects(id=user_id).first()
        if user is None:
            raise exceptions.AuthenticationFailed("User does not exist")

        if not user.is_active:
            raise exceptions.AuthenticationFailed("User has been disabled")

        return user
