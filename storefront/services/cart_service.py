# storefront/services/cart_service.py
import math
from typing import Any, Dict, List

from storefront.domain.cart import Cart, CART_SCHEMA_VERSION
from storefront.domain.migrations import migrate_state
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def resolve_catalog_object_id(line: Any) -> str:
    """variationId, potem koncowka id po ostatnim ':', potem productId, na koncu samo id."""
    if not isinstance(line, dict):
        return ""
    if line.get("variationId"):
        return str(line["variationId"])
    line_id = line.get("id")
    if isinstance(line_id, str) and ":" in line_id:
        last = line_id.split(":")[-1]
        if last:
            return last
    if line.get("productId"):
        return str(line["productId"])
    return line_id if isinstance(line_id, str) else ""


def _payload_price(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(price):
        return None
    if isinstance(value, (int, float)):
        return value
    return price or None


class CartService:
    """
    Use case'y koszyka sesji:
    commands (add, remove, clear) laduja stan, mutuja i zapisuja
    query (get, checkout_payload) tylko odczyt
    """

    def __init__(self, repo: CartRepo):
        self.repo = repo

    def _load(self, session_id: str) -> Cart:
        state, version = self.repo.load(session_id)

        if version < CART_SCHEMA_VERSION:
            logger.info(
                f"Migrating cart {session_id} from schema v{version} to v{CART_SCHEMA_VERSION}"
            )
            state = migrate_state(state, version)
            self.repo.save(session_id, state, CART_SCHEMA_VERSION)

        return Cart.from_state(state)

    def _save(self, session_id: str, cart: Cart) -> None:
        self.repo.save(session_id, cart.to_state(), CART_SCHEMA_VERSION)

    @staticmethod
    def _view(cart: Cart) -> Dict[str, Any]:
        return {
            "items": cart.items,
            "count": cart.count,
            "subtotal": cart.subtotal(),
            "currency": cart.currency(),
        }

    #query
    def get_cart(self, session_id: str) -> Dict[str, Any]:
        return self._view(self._load(session_id))

    def checkout_payload(self, session_id: str) -> Dict[str, List[Dict[str, Any]]]:
        cart = self._load(session_id)
        items = []
        for line in cart.items:
            variation_id = resolve_catalog_object_id(line)
            if not variation_id:
                continue
            items.append({
                "variationId": variation_id,
                "qty": line.get("qty"),
                "note": line.get("note"),
                "price": _payload_price(line.get("price")),
                "currency": line.get("currency") or "USD",
            })
        return {"items": items}

    #commands
    def add_item(self, session_id: str, item: Dict[str, Any]) -> Dict[str, Any]:
        cart = self._load(session_id)
        cart.add(item)
        self._save(session_id, cart)

        logger.info(f"Cart {session_id}: line {item['id']} qty delta {item.get('qty', 1)}, count {cart.count}")
        return self._view(cart)

    def remove_item(self, session_id: str, line_id: str) -> Dict[str, Any]:
        cart = self._load(session_id)
        cart.remove(line_id)
        self._save(session_id, cart)

        logger.info(f"Cart {session_id}: removed line {line_id}, count {cart.count}")
        return self._view(cart)

    def clear_cart(self, session_id: str) -> Dict[str, Any]:
        cart = self._load(session_id)
        cart.clear()
        self._save(session_id, cart)

        logger.info(f"Cart {session_id} cleared")
        return self._view(cart)
