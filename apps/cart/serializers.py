from __future__ import annotations

from rest_framework import serializers

from apps.products.mongo_serializers import ObjectIdField

class CartLineInputSerializer(serializers.Serializer):
    productId = ObjectIdField()
    quantity = serializers.IntegerField(min_value=1)
    size = serializers.CharField(required=False, allow_blank=True, default="")
    color = serializers.CharField(required=False, allow_blank=True, default="")

class CartInputSerializer(serializers.Serializer):
    items = CartLineInputSerializer(many=True, allow_empty=True)

def money(value) -> float:
    return float(value)

def serialize_cart(cart) -> dict:
    summary = cart.summary()
    return {
        "items": [
            {
                "id": str(line.key),
                "productId": line.key.product_id,
                "name": line.name,
                "price": money(line.price),
                "quantity": line.quantity,
                "size": line.key.size,
                "color": line.key.color,
                "image": line.image,
                "lineTotal": money(line.line_total),
            }
            for line in cart.items
        ],
        "itemCount": cart.item_count,
        "subtotal": money(summary.subtotal),
        "shipping": money(summary.shipping),
        "tax": money(summary.tax),
        "total": money(summary.total),
    }
