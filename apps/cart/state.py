"""Session-scoped shopping cart.

A ``Cart`` is a plain object owned by whoever creates it; nothing here is
shared or persisted. Every mutation recomputes ``total``.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Union

CENT = Decimal("0.01")
FREE_SHIPPING_THRESHOLD = Decimal("50")
SHIPPING_COST = Decimal("9.99")
TAX_RATE = Decimal("0.08")

@dataclass(frozen=True)
class LineKey:
    product_id: str
    size: str = ""
    color: str = ""

    def __str__(self) -> str:
        return f"{self.product_id}-{self.size}-{self.color}"

@dataclass
class CartLine:
    key: LineKey
    name: str
    price: Decimal
    quantity: int
    image: str = ""

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

@dataclass(frozen=True)
class CartSummary:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal

KeyLike = Union[LineKey, str]

class Cart:

    def __init__(self) -> None:
        self._lines: Dict[LineKey, CartLine] = {}
        self.total = Decimal("0")

    @property
    def items(self) -> List[CartLine]:
        return list(self._lines.values())

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)

    def _resolve(self, key: KeyLike) -> LineKey | None:
        """Find the line for ``key``.

        A string key is the ``"<productId>-<size>-<color>"`` form. Sizes and
        colors may themselves contain ``-``, so one string can name several
        lines; that raises ``KeyError`` and the caller must pass a ``LineKey``.
        """
        if isinstance(key, LineKey):
            return key if key in self._lines else None
        matches = [line_key for line_key in self._lines if str(line_key) == key]
        if len(matches) > 1:
            raise KeyError(f"ambiguous cart line {key!r}")
        return matches[0] if matches else None

    def _recompute(self) -> None:
        self.total = sum((line.line_total for line in self._lines.values()), Decimal("0"))

    def add(
        self,
        product_id: str,
        *,
        name: str,
        price,
        quantity: int = 1,
        size: str = "",
        color: str = "",
        image: str = "",
    ) -> CartLine:
        if quantity < 1:
            raise ValueError("quantity must be at least 1")
        key = LineKey(str(product_id), size or "", color or "")
        line = self._lines.get(key)
        if line is None:
            line = CartLine(key=key, name=name, price=Decimal(str(price)), quantity=quantity, image=image or "")
            self._lines[key] = line
        else:
            line.quantity += quantity
        self._recompute()
        return line

    def update_quantity(self, key: KeyLike, quantity: int) -> None:
        if quantity < 1:
            self.remove(key)
            return
        line_key = self._resolve(key)
        if line_key is None:
            raise KeyError(str(key))
        self._lines[line_key].quantity = quantity
        self._recompute()

    def remove(self, key: KeyLike) -> None:
        line_key = self._resolve(key)
        if line_key is not None:
            del self._lines[line_key]
        self._recompute()

    def clear(self) -> None:
        self._lines.clear()
        self._recompute()

    def summary(self) -> CartSummary:
        subtotal = self.total
        shipping = Decimal("0") if subtotal > FREE_SHIPPING_THRESHOLD or not self._lines else SHIPPING_COST
        tax = (subtotal * TAX_RATE).quantize(CENT, rounding=ROUND_HALF_UP)
        return CartSummary(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal + shipping + tax,
        )
