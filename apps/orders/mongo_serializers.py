from __future__ import annotations

from rest_framework import serializers

from .mongo_models import ORDER_STATUSES

class ShippingAddressSerializer(serializers.Serializer):
    address = serializers.CharField()
    city = serializers.CharField()
    postalCode = serializers.CharField(source="postal_code")
    country = serializers.CharField()

class OrderItemSerializer(serializers.Serializer):
    product = serializers.CharField(source="product_id")
    name = serializers.CharField()
    quantity = serializers.IntegerField()
    price = serializers.FloatField()
    size = serializers.CharField(allow_null=True)
    color = serializers.CharField(allow_null=True)
    image = serializers.CharField(allow_null=True)

class OrderSerializer(serializers.Serializer):
    _id = serializers.CharField(source="id", read_only=True)
    orderItems = OrderItemSerializer(source="order_items", many=True, read_only=True)
    shippingAddress = ShippingAddressSerializer(source="shipping_address", read_only=True, allow_null=True)
    totalPrice = serializers.FloatField(source="total_price", read_only=True)
    status = serializers.CharField(read_only=True)
    isDelivered = serializers.BooleanField(source="is_delivered", read_only=True)
    deliveredAt = serializers.DateTimeField(source="delivered_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        users = self.context.get("users", {})
        data["user"] = users.get(instance.user_id, {"_id": str(instance.user_id)})
        return data

class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ORDER_STATUSES)
