from rest_framework import routers

from .mongo_views import AdminStatsViewSet

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"admin/stats", AdminStatsViewSet, basename="admin-stats")
