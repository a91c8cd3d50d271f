# storefront/domain/migrations.py
"""
Migracje zapisanego stanu koszyka.

Kazda migracja to czysta funkcja na starym ksztalcie stanu. Migracja
nigdy nie rzuca wyjatku, elementy ktorych nie rozumie przechodza bez zmian.
"""
import uuid
from typing import Any

from storefront.domain.cart import count_quantities


def _non_blank(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def upgrade_line_v0(line: Any) -> Any:
    #v0 trzymal tylko id w formacie "<productId>:<variationId>"
    if not isinstance(line, dict):
        return line

    id_string = line["id"] if isinstance(line.get("id"), str) else ""
    parts = id_string.split(":") if ":" in id_string else []

    #tylko id z dwukropkiem niesie productId/variationId
    product_id = _non_blank(line.get("productId")) or (parts[0] if parts else None) or None
    variation_id = _non_blank(line.get("variationId")) or (parts[-1] if parts else None) or None

    if product_id and variation_id:
        normalized_id = f"{product_id}:{variation_id}"
    else:
        normalized_id = id_string or product_id or variation_id or uuid.uuid4().hex

    upgraded = {**line, "id": normalized_id}
    #pozostale pola (note, image...) bez zmian, nawet gdy sa null
    for key, value in (("productId", product_id), ("variationId", variation_id)):
        if value is None:
            upgraded.pop(key, None)
        else:
            upgraded[key] = value
    return upgraded


def migrate_state(state: Any, version: int) -> Any:
    if not state:
        return state

    if version < 1 and isinstance(state, dict) and isinstance(state.get("items"), list):
        upgraded = [upgrade_line_v0(line) for line in state["items"]]
        return {**state, "items": upgraded, "count": count_quantities(upgraded)}

    return state
