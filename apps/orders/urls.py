from rest_framework import routers

from .mongo_views import AdminOrderViewSet

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"admin/orders", AdminOrderViewSet, basename="admin-order")
