from rest_framework import routers

from .mongo_views import AdminUserViewSet

router = routers.SimpleRouter(trailing_slash=False)
router.register(r"admin/users", AdminUserViewSet, basename="admin-user")
