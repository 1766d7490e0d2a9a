from __future__ import annotations

import logging

from bson import ObjectId
from bson.errors import InvalidId
from rest_framework import exceptions, permissions, status, viewsets
from rest_framework.decorators import action

from apps.users.permissions import IsAdminRole
from apps.utils import api_success

from .mongo_models import Brand, Category, Product
from .mongo_serializers import BrandSerializer, CategorySerializer, ProductSerializer, reference_context
from .query import ProductListParams, build_product_query, run_product_query

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 8

ADMIN_ACTIONS = ("create", "update", "partial_update", "destroy")

def parse_object_id(value) -> ObjectId | None:
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None

class AdminWriteMixin:
    """Public reads, admin-only writes."""

    def get_permissions(self):
        if self.action in ADMIN_ACTIONS:
            return [IsAdminRole()]
        return [permissions.AllowAny()]

class SluggedEntityViewSet(AdminWriteMixin, viewsets.ViewSet):
    document = None
    serializer_class = None
    not_found_message = ""
    deleted_message = ""

    def get_object(self, pk, *, active_only: bool):
        object_id = parse_object_id(pk)
        if object_id is None:
            raise exceptions.NotFound(self.not_found_message)
        queryset = self.document.objects(id=object_id)
        if active_only:
            queryset = queryset.filter(is_active=True)
        entity = queryset.first()
        if entity is None:
            raise exceptions.NotFound(self.not_found_message)
        return entity

    def list(self, request):
        entities = self.document.objects(is_active=True).order_by("name")
        return api_success(self.serializer_class(entities, many=True).data)

    def retrieve(self, request, pk=None):
        entity = self.document.objects(slug=pk, is_active=True).first()
        if entity is None:
            entity = self.get_object(pk, active_only=True)
        return api_success(self.serializer_class(entity).data)

    def create(self, request):
        serializer = self.serializer_class(data=request.data)
        serializer.is_valid(raise_exception=True)
        entity = serializer.save()
        logger.info("%s %s created by %s", self.document.__name__, entity.id, request.auth.user_id)
        return api_success(self.serializer_class(entity).data, status_code=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        entity = self.get_object(pk, active_only=False)
        serializer = self.serializer_class(entity, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        entity = serializer.save()
        logger.info("%s %s updated by %s", self.document.__name__, entity.id, request.auth.user_id)
        return api_success(self.serializer_class(entity).data)

    def destroy(self, request, pk=None):
        entity = self.get_object(pk, active_only=False)
        entity.soft_delete()
        logger.info("%s %s deactivated by %s", self.document.__name__, entity.id, request.auth.user_id)
        return api_success({"message": self.deleted_message})

class CategoryViewSet(SluggedEntityViewSet):
    document = Category
    serializer_class = CategorySerializer
    not_found_message = "Category not found"
    deleted_message = "Category removed"

class BrandViewSet(SluggedEntityViewSet):
    document = Brand
    serializer_class = BrandSerializer
    not_found_message = "Brand not found"
    deleted_message = "Brand removed"

class ProductViewSet(AdminWriteMixin, viewsets.ViewSet):

    def get_object(self, pk, *, active_only: bool) -> Product:
        object_id = parse_object_id(pk)
        if object_id is None:
            raise exceptions.NotFound("Product not found")
        product = Product.objects(id=object_id).first()
        if product is None or (active_only and not product.is_active):
            raise exceptions.NotFound("Product not found")
        return product

    def list(self, request):
        params = ProductListParams.from_query_params(request.query_params)
        page = run_product_query(build_product_query(params))
        serializer = ProductSerializer(page.products, many=True, context=reference_context(page.products))
        return api_success(
            {
                "products": serializer.data,
                "currentPage": page.current_page,
                "totalPages": page.total_pages,
                "totalProducts": page.total_products,
            }
        )

    def retrieve(self, request, pk=None):
        product = self.get_object(pk, active_only=True)
        return api_success(ProductSerializer(product).data)

    @action(detail=False, methods=["get"], url_path="featured/list")
    def featured(self, request):
        products = list(
            Product.objects(is_featured=True, is_active=True).order_by("-created_at").limit(FEATURED_LIMIT)
        )
        serializer = ProductSerializer(products, many=True, context=reference_context(products))
        return api_success(serializer.data)

    def create(self, request):
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = serializer.save()
        logger.info("Product %s created by %s", product.id, request.auth.user_id)
        return api_success(ProductSerializer(product).data, status_code=status.HTTP_201_CREATED)

    def update(self, request, pk=None):
        product = self.get_object(pk, active_only=False)
        serializer = ProductSerializer(product, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product = serializer.save()
        logger.info("Product %s updated by %s", product.id, request.auth.user_id)
        return api_success(ProductSerializer(product).data)

    def destroy(self, request, pk=None):
        product = self.get_object(pk, active_only=False)
        product.soft_delete()
        logger.info("Product %s deactivated by %s", product.id, request.auth.user_id)
        return api_success({"message": "Product removed"})
