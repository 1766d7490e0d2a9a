from __future__ import annotations

import logging

from bson import ObjectId
from bson.errors import InvalidId
from rest_framework import exceptions, viewsets
from rest_framework.decorators import action

from apps.users.mongo_models import User
from apps.users.mongo_serializers import UserSummarySerializer
from apps.users.permissions import IsAdminRole
from apps.utils import api_success

from .mongo_models import Order
from .mongo_serializers import OrderSerializer, OrderStatusUpdateSerializer

logger = logging.getLogger(__name__)

def user_context(orders) -> dict:
    user_ids = list({order.user_id for order in orders if order.user_id})
    if not user_ids:
        return {"users": {}}
    users = User.objects(id__in=user_ids).only("name", "email")
    return {"users": {user.id: UserSummarySerializer(user).data for user in users}}

class AdminOrderViewSet(viewsets.ViewSet):

    permission_classes = [IsAdminRole]

    def list(self, request):
        orders = list(Order.objects.order_by("-created_at"))
        serializer = OrderSerializer(orders, many=True, context=user_context(orders))
        return api_success(serializer.data)

    @action(detail=True, methods=["put"], url_path="status")
    def update_status(self, request, pk=None):
        try:
            order = Order.objects(id=ObjectId(pk)).first()
        except (InvalidId, TypeError):
            order = None
        if order is None:
            raise exceptions.NotFound("Order not found")

        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order.set_status(serializer.validated_data["status"])
        logger.info("Order %s moved to %s by %s", order.id, order.status, request.auth.user_id)
        return api_success(OrderSerializer(order, context=user_context([order])).data)
