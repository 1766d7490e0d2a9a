from __future__ import annotations

import mongomock
from mongoengine import connect, disconnect
from mongoengine.connection import DEFAULT_CONNECTION_NAME
from rest_framework.test import APISimpleTestCase

from apps.orders.mongo_models import Order
from apps.products.mongo_models import Brand, Category, Product
from apps.users.authentication import issue_token
from apps.users.mongo_models import ROLE_ADMIN, ROLE_USER, RevokedToken, User

TEST_DB_NAME = "storefront-test"

DOCUMENTS = (Category, Brand, Product, User, RevokedToken, Order)

class MongoTestCase(APISimpleTestCase):
    """API test case backed by an in-memory mongomock database."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        disconnect(alias=DEFAULT_CONNECTION_NAME)
        connect(
            TEST_DB_NAME,
            alias=DEFAULT_CONNECTION_NAME,
            host="mongodb://localhost",
            mongo_client_class=mongomock.MongoClient,
        )

    @classmethod
    def tearDownClass(cls):
        disconnect(alias=DEFAULT_CONNECTION_NAME)
        super().tearDownClass()

    def tearDown(self):
        for document in DOCUMENTS:
            document.drop_collection()
        super().tearDown()

    def create_user(self, email="user@example.com", *, role=ROLE_USER, password="password123", name="Demo User"):
        user = User(name=name, email=email, role=role)
        user.set_password(password)
        user.save()
        return user

    def create_admin(self, email="admin@example.com", **kwargs):
        return self.create_user(email, role=ROLE_ADMIN, name="Admin User", **kwargs)

    def authenticate(self, user) -> str:
        token = issue_token(user)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")
        return token

    def login_as_admin(self):
        admin = self.create_admin()
        self.authenticate(admin)
        return admin

    def create_category(self, name, **kwargs):
        return Category(name=name, **kwargs).save()

    def create_brand(self, name, **kwargs):
        return Brand(name=name, **kwargs).save()

    def create_product(self, name, category, *, price=10, **kwargs):
        return Product(name=name, price=price, category_id=category.id, **kwargs).save()
