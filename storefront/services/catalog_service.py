# storefront/services/catalog_service.py
from typing import Any, Dict, List

from storefront.domain.schemas import Product, Variation
from storefront.services.square_client import SquareCatalogClient
from storefront.utils.images import safe_image_url
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _money_to_units(money: Any) -> tuple[float | None, str]:
    if not isinstance(money, dict) or money.get("amount") is None:
        return None, "USD"
    return money["amount"] / 100, money.get("currency") or "USD"


def _image_urls(objects: List[Dict[str, Any]]) -> Dict[str, str]:
    return {
        obj["id"]: (obj.get("image_data") or {}).get("url")
        for obj in objects
        if obj.get("type") == "IMAGE" and obj.get("id")
    }


def to_product(item: Dict[str, Any], images: Dict[str, str]) -> Product:
    data = item.get("item_data") or {}

    variations = []
    for variation in data.get("variations") or []:
        variation_data = variation.get("item_variation_data") or {}
        price, currency = _money_to_units(variation_data.get("price_money"))
        variations.append(Variation(
            id=variation["id"],
            name=variation_data.get("name") or "Default",
            price=price,
            currency=currency,
        ))

    image_ids = data.get("image_ids") or []
    image = safe_image_url(images.get(image_ids[0])) if image_ids else None

    first = variations[0] if variations else None
    return Product(
        id=item["id"],
        name=data.get("name") or "",
        description=data.get("description"),
        price=first.price if first else None,
        currency=first.currency if first else "USD",
        image=image,
        variations=variations,
    )


class CatalogService:
    def __init__(self, client: SquareCatalogClient):
        self.client = client

    def list_products(self) -> List[Product]:
        objects = self.client.list_catalog()
        images = _image_urls(objects)
        products = [
            to_product(obj, images)
            for obj in objects
            if obj.get("type") == "ITEM" and not obj.get("is_deleted")
        ]
        logger.info(f"Catalog returned {len(products)} products")
        return products

    def get_product(self, product_id: str) -> Product | None:
        data = self.client.retrieve_object(product_id)
        if not data:
            return None

        obj = data.get("object") or {}
        if obj.get("type") != "ITEM":
            return None

        images = _image_urls(data.get("related_objects") or [])
        return to_product(obj, images)
