from __future__ import annotations

from datetime import datetime

import bcrypt
import mongoengine as me
from mongoengine import fields

ROLE_USER = "user"
ROLE_ADMIN = "admin"

class User(me.Document):

    meta = {
        "collection": "users",
        "indexes": ["role"],
        "strict": False,
    }

    name = fields.StringField(required=True, max_length=100, db_field="name")
    email = fields.EmailField(required=True, unique=True, db_field="email")
    password = fields.StringField(required=False, db_field="password")
    role = fields.StringField(choices=(ROLE_USER, ROLE_ADMIN), default=ROLE_USER, db_field="role")
    is_active = fields.BooleanField(default=True, required=True, db_field="isActive")

    created_at = fields.DateTimeField(default=datetime.utcnow, db_field="createdAt")
    updated_at = fields.DateTimeField(default=datetime.utcnow, db_field="updatedAt")

    def save(self, *args, **kwargs):
        self.email = (self.email or "").strip().lower()
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def check_password(self, raw_password: str) -> bool:
        if not self.password:
            return False
        return bcrypt.checkpw(raw_password.encode("utf-8"), self.password.encode("utf-8"))

    def set_password(self, raw_password: str) -> None:
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(raw_password.encode("utf-8"), salt)
        self.password = hashed.decode("utf-8")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def is_anonymous(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.email

class RevokedToken(me.Document):

    meta = {
        "collection": "revoked_tokens",
        "indexes": [
            {"fields": ["expires_at"], "expireAfterSeconds": 0},
        ],
    }

    jti = fields.StringField(required=True, unique=True)
    user_id = fields.ObjectIdField(db_field="userId")
    expires_at = fields.DateTimeField(required=True, db_field="expiresAt")
    revoked_at = fields.DateTimeField(default=datetime.utcnow, db_field="revokedAt")

    @classmethod
    def is_revoked(cls, jti: str) -> bool:
        return cls.objects(jti=jti).first() is not None
