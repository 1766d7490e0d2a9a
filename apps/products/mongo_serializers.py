from __future__ import annotations

from collections.abc import Mapping
from typing import Dict, Iterable

from bson import ObjectId
from bson.errors import InvalidId
from django.utils.text import slugify
from mongoengine import Q
from mongoengine.errors import NotUniqueError
from rest_framework import serializers
from rest_framework.settings import api_settings

from apps.utils import DuplicateEntity

from .mongo_models import Brand, Category, Product, ProductColor

class ObjectIdField(serializers.Field):
    default_error_messages = {
        "invalid": "'{value}' is not a valid id.",
    }

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            data = data.get("_id") or data.get("id")
        try:
            return ObjectId(str(data))
        except (InvalidId, TypeError):
            self.fail("invalid", value=data)

    def to_representation(self, value):
        return str(value) if value is not None else None

class StrictFieldsMixin:
    """Reject payload keys the serializer does not declare.

    Read-only keys (``_id``, ``slug``, timestamps) are declared, so clients may
    echo a full document back; they are ignored on write.
    """

    def to_internal_value(self, data):
        if isinstance(data, Mapping):
            unknown = sorted(set(data) - set(self.fields))
            if unknown:
                raise serializers.ValidationError(
                    {api_settings.NON_FIELD_ERRORS_KEY: [f"Unknown field(s): {', '.join(unknown)}"]}
                )
        return super().to_internal_value(data)

def save_unique(document, duplicate_message: str):
    try:
        return document.save()
    except NotUniqueError:
        raise DuplicateEntity(duplicate_message)

class SluggedEntitySerializer(StrictFieldsMixin, serializers.Serializer):
    document = None
    entity_label = ""

    _id = serializers.CharField(source="id", read_only=True)
    name = serializers.CharField(max_length=50)
    slug = serializers.CharField(read_only=True)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True)
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    def validate_name(self, value):
        name = value.strip()
        slug = slugify(name)
        if not slug:
            raise serializers.ValidationError("Name must contain letters or digits.")
        queryset = self.document.objects(Q(name=name) | Q(slug=slug))
        if self.instance is not None:
            queryset = queryset.filter(id__ne=self.instance.id)
        if queryset.first() is not None:
            raise serializers.ValidationError(f"{self.entity_label} already exists")
        return name

    def create(self, validated_data):
        return save_unique(self.document(**validated_data), f"{self.entity_label} already exists")

    def update(self, instance, validated_data):
        for key, value in validated_data.items():
            setattr(instance, key, value)
        return save_unique(instance, f"{self.entity_label} already exists")

class CategorySerializer(SluggedEntitySerializer):
    document = Category
    entity_label = "Category"

    image = serializers.CharField(required=False, allow_blank=True, allow_null=True)

class BrandSerializer(SluggedEntitySerializer):
    document = Brand
    entity_label = "Brand"

    logo = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    website = serializers.CharField(required=False, allow_blank=True, allow_null=True)

class ProductColorSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    colorValue = serializers.CharField(source="color_value", max_length=50)

def _reference_summaries(document_cls, ids: Iterable[ObjectId]) -> Dict[ObjectId, dict]:
    ids = [object_id for object_id in set(ids) if object_id]
    if not ids:
        return {}
    return {
        document.id: {"_id": str(document.id), "name": document.name, "slug": document.slug}
        for document in document_cls.objects(id__in=ids).only("name", "slug")
    }

def reference_context(products) -> dict:
    """Batch-load the category and brand summaries a page of products needs."""
    products = list(products)
    return {
        "categories": _reference_summaries(Category, (product.category_id for product in products)),
        "brands": _reference_summaries(Brand, (product.brand_id for product in products)),
    }

class ProductSerializer(StrictFieldsMixin, serializers.Serializer):
    _id = serializers.CharField(source="id", read_only=True)
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.FloatField(min_value=0)
    originalPrice = serializers.FloatField(source="original_price", min_value=0, required=False, allow_null=True)
    category = ObjectIdField(source="category_id")
    brand = ObjectIdField(source="brand_id", required=False, allow_null=True)
    images = serializers.ListField(child=serializers.CharField(), required=False)
    sizes = serializers.ListField(child=serializers.CharField(max_length=20), required=False)
    colors = ProductColorSerializer(many=True, required=False)
    features = serializers.ListField(child=serializers.CharField(), required=False)
    stock = serializers.IntegerField(min_value=0, required=False)
    rating = serializers.FloatField(min_value=0, max_value=5, required=False)
    numReviews = serializers.IntegerField(source="num_reviews", min_value=0, required=False)
    badge = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    isFeatured = serializers.BooleanField(source="is_featured", required=False)
    isActive = serializers.BooleanField(source="is_active", required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    def validate_name(self, value):
        name = value.strip()
        if not name:
            raise serializers.ValidationError("Product name is required.")
        queryset = Product.objects(name=name)
        if self.instance is not None:
            queryset = queryset.filter(id__ne=self.instance.id)
        if queryset.first() is not None:
            raise serializers.ValidationError("Product name already exists")
        return name

    def validate_category(self, value):
        if Category.objects(id=value).first() is None:
            raise serializers.ValidationError("Category not found.")
        return value

    def validate_brand(self, value):
        if value is not None and Brand.objects(id=value).first() is None:
            raise serializers.ValidationError("Brand not found.")
        return value

    def _apply(self, product: Product, validated_data: dict) -> Product:
        colors = validated_data.pop("colors", None)
        for key, value in validated_data.items():
            setattr(product, key, value)
        if colors is not None:
            product.colors = [ProductColor(**color) for color in colors]
        return save_unique(product, "Product name already exists")

    def create(self, validated_data):
        return self._apply(Product(), validated_data)

    def update(self, instance, validated_data):
        return self._apply(instance, validated_data)

    def _reference(self, key: str, document_cls, object_id):
        if object_id is None:
            return None
        summaries = self.context.get(key)
        if summaries is None or object_id not in summaries:
            summaries = _reference_summaries(document_cls, [object_id])
        return summaries.get(object_id)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data["category"] = self._reference("categories", Category, instance.category_id)
        data["brand"] = self._reference("brands", Brand, instance.brand_id)
        return data
