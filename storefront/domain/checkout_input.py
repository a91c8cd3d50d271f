# storefront/domain/checkout_input.py
"""
Ksztalty wejscia dla checkoutu, rozstrzygane w stalej kolejnosci:

1. body JSON: {"items": [...], "redirectUrl": "..."}
2. pole formularza "payload" z tym samym JSON-em jako string
3. pojedynczy produkt z pol formularza ("Buy now")
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from storefront.domain.errors import CheckoutValidationError
from storefront.domain.line_items import normalize_money, build_line_item
from storefront.domain.schemas import CartPayload


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


@dataclass(frozen=True)
class CartCheckoutInput:
    items: List[Any] = field(default_factory=list)
    redirect_url: str | None = None
    source: str = "json"

    def line_items(self) -> List[Dict[str, Any]]:
        return [line for line in (build_line_item(item) for item in self.items) if line]


@dataclass(frozen=True)
class SingleItemCheckoutInput:
    item_id: str
    qty: Any = 1
    note: str = ""
    price: float | None = None
    currency: str | None = None
    redirect_url: str | None = None
    source: str = "form_single"

    def line_items(self) -> List[Dict[str, Any]]:
        line = build_line_item({
            "variationId": self.item_id,
            "qty": self.qty,
            "note": self.note,
            "price": self.price,
            "currency": self.currency,
        })
        return [line] if line else []


CheckoutInput = Union[CartCheckoutInput, SingleItemCheckoutInput]


def is_json_request(content_type: str | None) -> bool:
    return "application/json" in (content_type or "")


def parse_cart_payload(data: Any, source: str) -> CartCheckoutInput:
    payload = CartPayload.model_validate(data)
    return CartCheckoutInput(
        items=list(payload.items or []),
        redirect_url=_blank_to_none(payload.redirect_url),
        source=source,
    )


def parse_single_item(form: Mapping[str, Any]) -> SingleItemCheckoutInput:
    item_id = str(form.get("variationId") or form.get("id") or "").strip()
    if not item_id:
        raise CheckoutValidationError("Missing item id/variationId")

    return SingleItemCheckoutInput(
        item_id=item_id,
        qty=form.get("qty") or 1,
        note=str(form.get("note") or ""),
        price=normalize_money(form.get("price")),
        currency=_blank_to_none(form.get("currency")),
        redirect_url=_blank_to_none(form.get("redirectUrl")),
    )


def resolve_checkout_input(
    content_type: str | None,
    json_body: Any = None,
    form: Mapping[str, Any] | None = None,
) -> CheckoutInput:
    if is_json_request(content_type):
        return parse_cart_payload(json_body, source="json")

    form = form or {}
    payload = form.get("payload") or ""
    if payload:
        return parse_cart_payload(json.loads(payload), source="form_payload")

    return parse_single_item(form)
