# storefront/domain/cart.py
import math
from typing import Any, Dict, List

CART_SCHEMA_VERSION = 1


def line_quantity(line: Any) -> int | float:
    """Ilosc linii jako liczba, wszystko co nie jest liczba liczy sie jako 0."""
    if not isinstance(line, dict):
        return 0
    try:
        qty = float(line.get("qty") or 0)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(qty):
        return 0
    return int(qty) if qty.is_integer() else qty


def count_quantities(lines: List[Any]) -> int | float:
    return sum(line_quantity(line) for line in lines)


class Cart:
    """
    Stan koszyka jednej sesji:
    - jedna linia na unikalne id, kolejnosc dodawania zachowana
    - count zawsze rowny sumie qty
    - linia z qty <= 0 nigdy nie zostaje w stanie
    """

    def __init__(self, items: List[Dict[str, Any]] | None = None):
        self.items: List[Any] = list(items or [])
        self.count = count_quantities(self.items)

    def _find(self, line_id: str) -> Dict[str, Any] | None:
        for line in self.items:
            if isinstance(line, dict) and line.get("id") == line_id:
                return line
        return None

    def _recount(self) -> None:
        self.count = count_quantities(self.items)

    def add(self, item: Dict[str, Any]) -> None:
        """qty to delta: 1 zwieksza, -1 zmniejsza, brak qty oznacza +1."""
        delta = item.get("qty")
        if delta is None:
            delta = 1

        existing = self._find(item["id"])

        if existing:
            new_qty = line_quantity(existing) + delta
            if new_qty <= 0:
                self.items = [
                    line for line in self.items
                    if not (isinstance(line, dict) and line.get("id") == item["id"])
                ]
            else:
                #pozostale pola zostaja z istniejacej linii
                self.items = [
                    {**line, "qty": new_qty} if line is existing else line
                    for line in self.items
                ]
        elif delta > 0:
            self.items = [*self.items, {**item, "qty": delta}]

        self._recount()

    def remove(self, line_id: str) -> None:
        self.items = [
            line for line in self.items
            if not (isinstance(line, dict) and line.get("id") == line_id)
        ]
        self._recount()

    def clear(self) -> None:
        self.items = []
        self.count = 0

    def subtotal(self) -> float:
        total = 0.0
        for line in self.items:
            if not isinstance(line, dict):
                continue
            try:
                total += float(line.get("price") or 0) * line_quantity(line)
            except (TypeError, ValueError):
                continue
        return round(total, 2)

    def currency(self) -> str:
        first = self.items[0] if self.items else None
        if isinstance(first, dict) and first.get("currency"):
            return first["currency"]
        return "USD"

    def to_state(self) -> Dict[str, Any]:
        return {"items": list(self.items), "count": self.count}

    @classmethod
    def from_state(cls, state: Any) -> "Cart":
        if not isinstance(state, dict) or not isinstance(state.get("items"), list):
            return cls()
        return cls(state["items"])
