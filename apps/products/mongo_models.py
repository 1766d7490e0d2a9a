from __future__ import annotations

from datetime import datetime

import mongoengine as me
from django.utils.text import slugify
from mongoengine import fields

class SluggedDocument(me.Document):
    """Catalog entity whose slug is derived from its name on every save."""

    meta = {
        "abstract": True,
        "strict": False,
    }

    name = fields.StringField(required=True, unique=True, max_length=50)
    slug = fields.StringField(required=True, unique=True)
    description = fields.StringField(max_length=500)
    is_active = fields.BooleanField(default=True, db_field="isActive")
    created_at = fields.DateTimeField(default=datetime.utcnow, db_field="createdAt")
    updated_at = fields.DateTimeField(default=datetime.utcnow, db_field="updatedAt")

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        self.slug = slugify(self.name)
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def soft_delete(self) -> None:
        self.is_active = False
        self.save()

    def __str__(self) -> str:
        return self.name

class Category(SluggedDocument):

    meta = {
        "collection": "categories",
        "indexes": ["is_active"],
        "strict": False,
    }

    image = fields.StringField()

class Brand(SluggedDocument):

    meta = {
        "collection": "brands",
        "indexes": ["is_active"],
        "strict": False,
    }

    logo = fields.StringField()
    website = fields.StringField()

class ProductColor(me.EmbeddedDocument):

    name = fields.StringField(required=True, max_length=50)
    color_value = fields.StringField(required=True, max_length=50, db_field="colorValue")

class Product(me.Document):

    meta = {
        "collection": "products",
        "indexes": [
            "category_id",
            "brand_id",
            "price",
            ("is_active", "-is_featured", "-created_at"),
        ],
        "strict": False,
    }

    name = fields.StringField(required=True, unique=True, max_length=200)
    description = fields.StringField(default="")
    price = fields.DecimalField(required=True, min_value=0, precision=2)
    original_price = fields.DecimalField(min_value=0, precision=2, null=True, db_field="originalPrice")
    category_id = fields.ObjectIdField(required=True, db_field="category")
    brand_id = fields.ObjectIdField(null=True, db_field="brand")
    images = fields.ListField(fields.StringField(), default=list)
    sizes = fields.ListField(fields.StringField(max_length=20), default=list)
    colors = fields.EmbeddedDocumentListField(ProductColor, default=list)
    features = fields.ListField(fields.StringField(), default=list)
    stock = fields.IntField(default=0, min_value=0)
    rating = fields.FloatField(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews = fields.IntField(default=0, min_value=0, db_field="numReviews")
    badge = fields.StringField(max_length=50, null=True)
    is_featured = fields.BooleanField(default=False, db_field="isFeatured")
    is_active = fields.BooleanField(default=True, db_field="isActive")

    created_at = fields.DateTimeField(default=datetime.utcnow, db_field="createdAt")
    updated_at = fields.DateTimeField(default=datetime.utcnow, db_field="updatedAt")

    def save(self, *args, **kwargs):
        self.name = (self.name or "").strip()
        self.sizes = list(dict.fromkeys(self.sizes or []))
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def soft_delete(self) -> None:
        self.is_active = False
        self.save()

    def __str__(self) -> str:
        return self.name or f"Product {self.id}"
