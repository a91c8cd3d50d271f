# storefront/api/routers/products.py
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from requests import RequestException

from storefront.services.catalog_service import CatalogService
from storefront.services.square_client import SquareCatalogClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def get_service() -> CatalogService:
    return CatalogService(SquareCatalogClient())


@router.get("")
def get_products(
    id: str | None = Query(None),
    svc: CatalogService = Depends(get_service),
):
    try:
        if id:
            product = svc.get_product(id)
            if not product:
                return JSONResponse({"error": "Product not found"}, status_code=404)
            return {"item": product.model_dump()}

        return {"items": [p.model_dump() for p in svc.list_products()]}
    except RequestException as e:
        logger.error(f"Catalog request failed: {e}")
        return JSONResponse({"error": str(e)}, status_code=502)
