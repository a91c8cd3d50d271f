# storefront/domain/line_items.py
"""
Normalizacja linii koszyka do formatu line item Square Orders API.

Zle linie sa pomijane (None), nie przerywaja calego checkoutu.
Cena jest opcjonalna: bez poprawnej ceny Square uzyje ceny z katalogu.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Mapping

DEFAULT_CURRENCY = "USD"

#Square trzyma amount jako int64
MAX_MINOR_UNITS = 2 ** 63 - 1


def normalize_money(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            parsed = float(value)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def normalize_quantity(value: Any) -> str:
    try:
        qty = float(value)
    except (TypeError, ValueError):
        qty = 1.0
    if not math.isfinite(qty) or qty < 1:
        qty = 1.0
    return str(max(1, math.floor(qty)))


def normalize_currency(value: Any) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip().upper()
    return DEFAULT_CURRENCY


def to_minor_units(amount: float) -> int | None:
    #Decimal(str()) zeby 4.995 dawalo 500 a nie 499
    raw = Decimal(str(amount)) * 100
    #sprawdzamy przed quantize, ktore nie zmiesci 1e308 w precyzji kontekstu
    if abs(raw) > MAX_MINOR_UNITS:
        return None
    return int(raw.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_line_item(item: Mapping[str, Any]) -> Dict[str, Any] | None:
    if not isinstance(item, Mapping):
        return None

    catalog_object_id = item.get("variationId") or item.get("id")
    if not catalog_object_id or not isinstance(catalog_object_id, str):
        return None

    line: Dict[str, Any] = {
        "catalog_object_id": catalog_object_id,
        "quantity": normalize_quantity(item.get("qty")),
    }

    if item.get("note"):
        line["note"] = item["note"]

    price = normalize_money(item.get("price"))
    if price is not None and price >= 0:
        amount = to_minor_units(price)
        if amount is not None:
            line["base_price_money"] = {
                "amount": amount,
                "currency": normalize_currency(item.get("currency")),
            }

    return line
