# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.concurrency import run_in_threadpool

from storefront.domain.checkout_input import is_json_request, resolve_checkout_input
from storefront.domain.errors import (
    CheckoutValidationError,
    MissingCheckoutUrlError,
    PaymentProviderError,
)
from storefront.services.checkout_service import CheckoutService
from storefront.services.square_client import PaymentLinkClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["checkout"])


def get_service() -> CheckoutService:
    return CheckoutService(PaymentLinkClient())


@router.post("/checkout")
async def checkout(request: Request, svc: CheckoutService = Depends(get_service)):
    """
    Przyjmuje JSON, formularz z polem payload albo pojedynczy produkt
    i przekierowuje (303) na hostowany checkout Square.
    """
    try:
        content_type = request.headers.get("content-type")
        if is_json_request(content_type):
            checkout_input = resolve_checkout_input(content_type, json_body=await request.json())
        else:
            checkout_input = resolve_checkout_input(content_type, form=await request.form())

        #requests blokuje, wiec poza event loopem
        url = await run_in_threadpool(svc.create_checkout, checkout_input)

    except CheckoutValidationError as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except PaymentProviderError as e:
        return JSONResponse({"error": e.body}, status_code=e.status_code)
    except MissingCheckoutUrlError as e:
        logger.error(f"Checkout failed: {e}")
        return JSONResponse({"error": str(e)}, status_code=500)
    except Exception as e:
        logger.exception(f"Unexpected checkout error: {e}")
        return JSONResponse({"error": str(e) or "Unknown error"}, status_code=500)

    return RedirectResponse(url, status_code=303)
