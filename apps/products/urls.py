from rest_framework import routers

from .mongo_views import BrandViewSet, CategoryViewSet, ProductViewSet

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"products", ProductViewSet, basename="product")
router.register(r"categories", CategoryViewSet, basename="category")
router.register(r"brands", BrandViewSet, basename="brand")
