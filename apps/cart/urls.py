from django.urls import re_path

from .views import CartSummaryView

urlpatterns = [
    re_path(r"^summary/?$", CartSummaryView.as_view(), name="cart-summary"),
]
