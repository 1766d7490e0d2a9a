"""Translate storefront listing parameters into a bounded catalog read.

Flow: ``ProductListParams`` (parsed from the request) -> ``build_product_query``
(slug resolution plus filters and ordering) -> ``run_product_query`` (count and page).
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Tuple

from bson import ObjectId
from rest_framework import serializers

from apps.utils import get_pagination_params, paginate_queryset

from .mongo_models import Brand, Category, Product

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12

SORT_OPTIONS = {
    "price-low": ("+price",),
    "price-high": ("-price",),
    "rating": ("-rating",),
    "newest": ("-created_at",),
}
DEFAULT_SORT = ("-is_featured", "-created_at")

class PriceBoundsSerializer(serializers.Serializer):
    minPrice = serializers.DecimalField(max_digits=None, decimal_places=None, min_value=0, required=False)
    maxPrice = serializers.DecimalField(max_digits=None, decimal_places=None, min_value=0, required=False)

@dataclass
class ProductListParams:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    search: Optional[str] = None
    sort: Optional[str] = None

    @classmethod
    def from_query_params(cls, query_params) -> "ProductListParams":
        page, limit = get_pagination_params(query_params, default_page_size=DEFAULT_PAGE_SIZE)

        bounds = PriceBoundsSerializer(data={
            key: query_params.get(key)
            for key in ("minPrice", "maxPrice")
            if query_params.get(key) not in (None, "")
        })
        bounds.is_valid(raise_exception=True)

        return cls(
            page=page,
            limit=limit,
            category=query_params.get("category") or None,
            brand=query_params.get("brand") or None,
            min_price=bounds.validated_data.get("minPrice"),
            max_price=bounds.validated_data.get("maxPrice"),
            search=query_params.get("search") or None,
            sort=query_params.get("sort") or None,
        )

@dataclass
class ProductQuery:
    filters: dict = field(default_factory=dict)
    raw: Optional[dict] = None
    ordering: Tuple[str, ...] = DEFAULT_SORT
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def queryset(self):
        queryset = Product.objects(**self.filters)
        if self.raw:
            queryset = queryset.filter(__raw__=self.raw)
        return queryset.order_by(*self.ordering)

@dataclass
class ProductPage:
    products: List[Product]
    current_page: int
    total_pages: int
    total_products: int

def resolve_slug(document_cls, slug: str) -> Optional[ObjectId]:
    document = document_cls.objects(slug=slug).only("id").first()
    return document.id if document is not None else None

def build_product_query(params: ProductListParams) -> ProductQuery:
    filters = {"is_active": True}

    # An unknown slug drops its filter instead of emptying the result.
    if params.category:
        category_id = resolve_slug(Category, params.category)
        if category_id is not None:
            filters["category_id"] = category_id
        else:
            logger.debug("Ignoring unknown category slug %r", params.category)

    if params.brand:
        brand_id = resolve_slug(Brand, params.brand)
        if brand_id is not None:
            filters["brand_id"] = brand_id
        else:
            logger.debug("Ignoring unknown brand slug %r", params.brand)

    if params.min_price is not None:
        filters["price__gte"] = params.min_price
    if params.max_price is not None:
        filters["price__lte"] = params.max_price

    raw = None
    if params.search:
        pattern = re.escape(params.search)
        raw = {"$or": [
            {"name": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
        ]}

    return ProductQuery(
        filters=filters,
        raw=raw,
        ordering=SORT_OPTIONS.get(params.sort, DEFAULT_SORT),
        page=params.page,
        limit=params.limit,
    )

def run_product_query(query: ProductQuery) -> ProductPage:
    products, total_count, total_pages, current_page, _ = paginate_queryset(
        query.queryset(), query.page, query.limit
    )
    return ProductPage(
        products=products,
        current_page=current_page,
        total_pages=total_pages,
        total_products=total_count,
    )
