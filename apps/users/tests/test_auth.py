from __future__ import annotations

from datetime import timedelta

from rest_framework_simplejwt.tokens import AccessToken

from apps.users.authentication import ROLE_CLAIM
from apps.users.mongo_models import RevokedToken, User
from apps.utils.testing import MongoTestCase

class RegisterAndLoginTests(MongoTestCase):

    def test_register_returns_user_and_token(self):
        response = self.client.post(
            "/api/auth/register",
            {"name": "Jane", "email": "Jane@Example.com", "password": "secret123"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["user"]["email"], "jane@example.com")
        self.assertEqual(response.data["user"]["role"], "user")
        self.assertNotIn("password", response.data["user"])
        self.assertTrue(response.data["token"])
        self.assertTrue(User.objects.get(email="jane@example.com").check_password("secret123"))

    def test_register_duplicate_email(self):
        self.create_user("jane@example.com")

        response = self.client.post(
            "/api/auth/register",
            {"name": "Jane", "email": "jane@example.com", "password": "secret123"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "User already exists")

    def test_register_short_password(self):
        response = self.client.post(
            "/api/auth/register",
            {"name": "Jane", "email": "jane@example.com", "password": "abc"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("password", response.data["errors"])

    def test_login(self):
        user = self.create_user("jane@example.com", password="secret123")

        response = self.client.post(
            "/api/auth/login", {"email": "jane@example.com", "password": "secret123"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["user"]["_id"], str(user.id))
        token = AccessToken(response.data["token"])
        self.assertEqual(token["user_id"], str(user.id))
        self.assertEqual(token[ROLE_CLAIM], "user")

    def test_login_wrong_password(self):
        self.create_user("jane@example.com", password="secret123")

        response = self.client.post(
            "/api/auth/login", {"email": "jane@example.com", "password": "nope"}, format="json"
        )

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data, {"message": "Invalid email or password"})

    def test_login_unknown_email(self):
        response = self.client.post(
            "/api/auth/login", {"email": "ghost@example.com", "password": "secret123"}, format="json"
        )
        self.assertEqual(response.status_code, 401)

    def test_login_disabled_account(self):
        user = self.create_user("jane@example.com", password="secret123")
        user.is_active = False
        user.save()

        response = self.client.post(
            "/api/auth/login", {"email": "jane@example.com", "password": "secret123"}, format="json"
        )

        self.assertEqual(response.status_code, 401)

    def test_admin_login_rejects_customers(self):
        self.create_user("jane@example.com", password="secret123")

        response = self.client.post(
            "/api/auth/admin/login", {"email": "jane@example.com", "password": "secret123"}, format="json"
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["message"], "Not authorized as an admin")

    def test_admin_login(self):
        self.create_admin(password="adminpass")

        response = self.client.post(
            "/api/auth/admin/login", {"email": "admin@example.com", "password": "adminpass"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(AccessToken(response.data["token"])[ROLE_CLAIM], "admin")

class CredentialTests(MongoTestCase):

    def test_profile_requires_token(self):
        response = self.client.get("/api/auth/profile")
        self.assertEqual(response.status_code, 401)

    def test_profile(self):
        user = self.create_user()
        self.authenticate(user)

        response = self.client.get("/api/auth/profile")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["user"]["email"], user.email)

    def test_tampered_token(self):
        token = self.authenticate(self.create_user())
        unsigned = token.rsplit(".", 1)[0]
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {unsigned}.forgedsignature")

        response = self.client.get("/api/auth/profile")

        self.assertEqual(response.status_code, 401)

    def test_expired_token(self):
        user = self.create_user()
        token = AccessToken.for_user(user)
        token.set_exp(lifetime=-timedelta(minutes=5))
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = self.client.get("/api/auth/profile")

        self.assertEqual(response.status_code, 401)

    def test_deleted_user(self):
        user = self.create_user()
        self.authenticate(user)
        user.delete()

        response = self.client.get("/api/auth/profile")

        self.assertEqual(response.status_code, 401)

    def test_disabled_user(self):
        user = self.create_user()
        self.authenticate(user)
        user.is_active = False
        user.save()

        response = self.client.get("/api/auth/profile")

        self.assertEqual(response.status_code, 401)

    def test_logout_revokes_token(self):
        token = self.authenticate(self.create_user())

        response = self.client.post("/api/auth/logout")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"message": "Logged out"})
        self.assertTrue(RevokedToken.is_revoked(AccessToken(token)["jti"]))
        self.assertEqual(self.client.get("/api/auth/profile").status_code, 401)

    def test_logout_leaves_other_sessions(self):
        user = self.create_user()
        self.authenticate(user)
        self.client.post("/api/auth/logout")

        self.authenticate(user)

        self.assertEqual(self.client.get("/api/auth/profile").status_code, 200)

class AdminUserListTests(MongoTestCase):

    def test_requires_admin(self):
        self.authenticate(self.create_user())
        self.assertEqual(self.client.get("/api/admin/users").status_code, 403)

    def test_lists_users_without_passwords(self):
        self.create_user("jane@example.com")
        self.login_as_admin()

        response = self.client.get("/api/admin/users")

        self.assertEqual(response.status_code, 200)
        self.assertEqual({entry["email"] for entry in response.data}, {"jane@example.com", "admin@example.com"})
        for entry in response.data:
            self.assertNotIn("password", entry)
