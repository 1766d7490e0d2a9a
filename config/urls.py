from __future__ import annotations

from django.urls import include, path
from rest_framework import routers

from apps.cart.urls import urlpatterns as cart_urlpatterns
from apps.orders.urls import router as orders_router
from apps.products.urls import router as products_router
from apps.statistics.urls import router as statistics_router
from apps.users.urls import router as users_router

class StorefrontRouter(routers.SimpleRouter):

    def __init__(self) -> None:
        super().__init__()
        self.trailing_slash = "/?"

    def extend(self, router: routers.SimpleRouter) -> None:
        for prefix, viewset, basename in router.registry:
            self.register(prefix, viewset, basename=basename)

api_router = StorefrontRouter()
api_router.extend(products_router)
api_router.extend(orders_router)
api_router.extend(statistics_router)
api_router.extend(users_router)

urlpatterns = [
    path("api/auth/", include("apps.users.auth_urls")),
    path("api/cart/", include(cart_urlpatterns)),
    path("api/", include(api_router.urls)),
]
