from __future__ import annotations

from rest_framework import permissions, serializers
from rest_framework.views import APIView

from apps.products.mongo_models import Product
from apps.utils import api_success

from .serializers import CartInputSerializer, serialize_cart
from .state import Cart

class CartSummaryView(APIView):
    """Price a client-held cart against the live catalog without storing it."""

    permission_classes = [permissions.AllowAny]
    authentication_classes: list = []

    def post(self, request, *args, **kwargs):
        serializer = CartInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        lines = serializer.validated_data["items"]

        product_ids = list({line["productId"] for line in lines})
        products = {
            product.id: product
            for product in Product.objects(id__in=product_ids, is_active=True).only("name", "price", "images")
        }

        cart = Cart()
        for line in lines:
            product = products.get(line["productId"])
            if product is None:
                raise serializers.ValidationError({"items": [f"Product not found: {line['productId']}"]})
            cart.add(
                str(product.id),
                name=product.name,
                price=product.price,
                quantity=line["quantity"],
                size=line["size"],
                color=line["color"],
                image=product.images[0] if product.images else "",
            )
        return api_success(serialize_cart(cart))
