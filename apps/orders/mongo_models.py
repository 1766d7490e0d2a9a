from __future__ import annotations

from datetime import datetime

import mongoengine as me
from mongoengine import fields

ORDER_STATUSES = ("Pending", "Processing", "Shipped", "Delivered", "Cancelled")
STATUS_DELIVERED = "Delivered"

class ShippingAddress(me.EmbeddedDocument):

    address = fields.StringField(required=True, max_length=255)
    city = fields.StringField(required=True, max_length=100)
    postal_code = fields.StringField(required=True, max_length=20, db_field="postalCode")
    country = fields.StringField(required=True, max_length=100)

    def __str__(self) -> str:
        return f"{self.address}, {self.city}"

class OrderItem(me.EmbeddedDocument):

    product_id = fields.ObjectIdField(required=True, db_field="product")
    name = fields.StringField(required=True, max_length=255)
    quantity = fields.IntField(required=True, min_value=1)
    price = fields.DecimalField(required=True, min_value=0, precision=2)
    size = fields.StringField(max_length=20)
    color = fields.StringField(max_length=50)
    image = fields.StringField()

class Order(me.Document):

    meta = {
        "collection": "orders",
        "indexes": ["user_id", "created_at", "status"],
    }

    user_id = fields.ObjectIdField(required=True, db_field="user")
    order_items = fields.EmbeddedDocumentListField(OrderItem, default=list, db_field="orderItems")
    shipping_address = fields.EmbeddedDocumentField(ShippingAddress, null=True, db_field="shippingAddress")
    total_price = fields.DecimalField(default=0, min_value=0, precision=2, db_field="totalPrice")

    status = fields.StringField(default="Pending", choices=ORDER_STATUSES)
    is_delivered = fields.BooleanField(default=False, db_field="isDelivered")
    delivered_at = fields.DateTimeField(null=True, db_field="deliveredAt")

    created_at = fields.DateTimeField(default=datetime.utcnow, db_field="createdAt")
    updated_at = fields.DateTimeField(default=datetime.utcnow, db_field="updatedAt")

    def save(self, *args, **kwargs):
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def set_status(self, status: str) -> None:
        self.status = status
        if status == STATUS_DELIVERED:
            self.is_delivered = True
            self.delivered_at = datetime.utcnow()
        self.save()

    def __str__(self) -> str:
        return f"Order {self.id}"
