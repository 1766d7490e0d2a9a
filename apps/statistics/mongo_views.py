from __future__ import annotations

from rest_framework import viewsets

from apps.orders.mongo_models import Order
from apps.products.mongo_models import Product
from apps.users.mongo_models import ROLE_USER, User
from apps.users.permissions import IsAdminRole
from apps.utils import api_success

def monthly_revenue(orders) -> list[dict]:
    """Group orders by creation month (``YYYY-MM``), oldest month first."""
    buckets: dict[str, dict] = {}
    for order in orders:
        if not order.created_at:
            continue
        key = order.created_at.strftime("%Y-%m")
        bucket = buckets.setdefault(key, {"_id": key, "revenue": 0.0, "orders": 0})
        bucket["revenue"] += float(order.total_price or 0)
        bucket["orders"] += 1

    return [
        {**buckets[key], "revenue": round(buckets[key]["revenue"], 2)}
        for key in sorted(buckets)
    ]

class AdminStatsViewSet(viewsets.ViewSet):
    """Dashboard totals for the admin back office."""

    permission_classes = [IsAdminRole]

    def list(self, request):
        orders = list(Order.objects.only("total_price", "created_at"))
        total_revenue = sum(float(order.total_price or 0) for order in orders)

        return api_success(
            {
                "totalProducts": Product.objects(is_active=True).count(),
                "totalOrders": len(orders),
                "totalUsers": User.objects(role=ROLE_USER).count(),
                "totalRevenue": round(total_revenue, 2),
                "monthlyRevenue": monthly_revenue(orders),
            }
        )
