from __future__ import annotations

import math
from datetime import datetime, timedelta
from decimal import Decimal

from django.http import QueryDict
from rest_framework.exceptions import ValidationError

from apps.products.query import (
    DEFAULT_SORT,
    ProductListParams,
    build_product_query,
    resolve_slug,
    run_product_query,
)
from apps.utils.testing import MongoTestCase

class ProductListParamsTests(MongoTestCase):

    def test_defaults(self):
        params = ProductListParams.from_query_params(QueryDict(""))
        self.assertEqual(params.page, 1)
        self.assertEqual(params.limit, 12)
        self.assertIsNone(params.category)
        self.assertIsNone(params.min_price)

    def test_lenient_page_and_limit(self):
        params = ProductListParams.from_query_params(QueryDict("page=abc&limit=0"))
        self.assertEqual(params.page, 1)
        self.assertEqual(params.limit, 1)

    def test_limit_has_no_upper_bound(self):
        params = ProductListParams.from_query_params(QueryDict("limit=500"))
        self.assertEqual(params.limit, 500)

    def test_price_bounds_are_parsed(self):
        params = ProductListParams.from_query_params(QueryDict("minPrice=5&maxPrice=19.5"))
        self.assertEqual(params.min_price, Decimal("5"))
        self.assertEqual(params.max_price, Decimal("19.5"))

    def test_price_bounds_keep_full_precision(self):
        params = ProductListParams.from_query_params(QueryDict("minPrice=9.995&maxPrice=99999999999"))
        self.assertEqual(params.min_price, Decimal("9.995"))
        self.assertEqual(params.max_price, Decimal("99999999999"))

    def test_invalid_price_is_rejected(self):
        with self.assertRaises(ValidationError):
            ProductListParams.from_query_params(QueryDict("minPrice=cheap"))

class BuildProductQueryTests(MongoTestCase):

    def setUp(self):
        super().setUp()
        self.hats = self.create_category("Hats")
        self.shirts = self.create_category("T-Shirts")
        self.brand = self.create_brand("ALN Brand")

    def test_resolve_slug(self):
        self.assertEqual(resolve_slug(type(self.hats), "hats"), self.hats.id)
        self.assertIsNone(resolve_slug(type(self.hats), "shoes"))

    def test_always_filters_active(self):
        query = build_product_query(ProductListParams())
        self.assertEqual(query.filters, {"is_active": True})
        self.assertEqual(query.ordering, DEFAULT_SORT)
        self.assertIsNone(query.raw)

    def test_resolved_slugs_become_id_filters(self):
        query = build_product_query(ProductListParams(category="hats", brand="aln-brand"))
        self.assertEqual(query.filters["category_id"], self.hats.id)
        self.assertEqual(query.filters["brand_id"], self.brand.id)

    def test_unknown_slug_drops_filter(self):
        query = build_product_query(ProductListParams(category="nope", brand="nada"))
        self.assertNotIn("category_id", query.filters)
        self.assertNotIn("brand_id", query.filters)

    def test_price_bounds_apply_independently(self):
        query = build_product_query(ProductListParams(min_price=Decimal("10")))
        self.assertEqual(query.filters["price__gte"], Decimal("10"))
        self.assertNotIn("price__lte", query.filters)

    def test_sort_options(self):
        self.assertEqual(build_product_query(ProductListParams(sort="price-low")).ordering, ("+price",))
        self.assertEqual(build_product_query(ProductListParams(sort="price-high")).ordering, ("-price",))
        self.assertEqual(build_product_query(ProductListParams(sort="rating")).ordering, ("-rating",))
        self.assertEqual(build_product_query(ProductListParams(sort="newest")).ordering, ("-created_at",))
        self.assertEqual(build_product_query(ProductListParams(sort="bogus")).ordering, DEFAULT_SORT)

    def test_search_is_escaped(self):
        query = build_product_query(ProductListParams(search="a+b"))
        self.assertEqual(query.raw["$or"][0]["name"], {"$regex": r"a\+b", "$options": "i"})

class RunProductQueryTests(MongoTestCase):

    def setUp(self):
        super().setUp()
        self.category = self.create_category("Hats")
        for index in range(5):
            self.create_product(f"Hat {index}", self.category, price=10 + index)

    def test_page_arithmetic(self):
        limit = 2
        for page in range(1, 5):
            result = run_product_query(build_product_query(ProductListParams(page=page, limit=limit)))
            self.assertEqual(result.total_products, 5)
            self.assertEqual(result.total_pages, math.ceil(5 / limit))
            self.assertEqual(result.current_page, page)
            expected = max(0, min(limit, 5 - (page - 1) * limit))
            self.assertEqual(len(result.products), expected)

    def test_empty_result_has_zero_pages(self):
        result = run_product_query(build_product_query(ProductListParams(search="no such thing")))
        self.assertEqual(result.total_products, 0)
        self.assertEqual(result.total_pages, 0)
        self.assertEqual(result.products, [])

    def test_search_matches_name_or_description(self):
        self.create_product("Plain Cap", self.category, description="A WOOL beanie alternative")
        result = run_product_query(build_product_query(ProductListParams(search="wool")))
        self.assertEqual([product.name for product in result.products], ["Plain Cap"])

        result = run_product_query(build_product_query(ProductListParams(search="hat 3")))
        self.assertEqual([product.name for product in result.products], ["Hat 3"])

    def test_price_range(self):
        params = ProductListParams(min_price=Decimal("11"), max_price=Decimal("13"), sort="price-low")
        result = run_product_query(build_product_query(params))
        self.assertEqual([float(product.price) for product in result.products], [11.0, 12.0, 13.0])

    def test_default_sort_puts_featured_first(self):
        now = datetime.utcnow()
        self.create_product("Old Featured", self.category, price=1, is_featured=True, created_at=now - timedelta(days=30))
        self.create_product("New Plain", self.category, price=999, created_at=now + timedelta(days=1))

        result = run_product_query(build_product_query(ProductListParams(limit=50)))
        flags = [product.is_featured for product in result.products]
        self.assertTrue(flags[0])
        self.assertEqual(flags, sorted(flags, reverse=True))

    def test_fractional_bound_filters(self):
        self.create_product("Budget Hat", self.category, price=9.99)
        params = ProductListParams.from_query_params(QueryDict("minPrice=9.995&maxPrice=99999999999&sort=price-low"))
        result = run_product_query(build_product_query(params))
        self.assertEqual(result.total_products, 5)
        self.assertEqual(float(result.products[0].price), 10.0)
