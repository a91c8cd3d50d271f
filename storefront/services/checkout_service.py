# storefront/services/checkout_service.py
import uuid
from typing import Any, Dict, List

from storefront.domain.checkout_input import CheckoutInput
from storefront.domain.errors import CheckoutValidationError, MissingCheckoutUrlError
from storefront.services.square_client import PaymentLinkClient
from storefront.utils.settings import SQUARE_LOCATION_ID, DEFAULT_REDIRECT_URL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Zamienia wejscie checkoutu na payment link Square:

    1. normalizuje linie (zle linie odpadaja)
    2. buduje zamowienie z nowym idempotency key
    3. wysyla do Online Checkout API
    4. zwraca URL hostowanego checkoutu
    """

    def __init__(
        self,
        payment_links: PaymentLinkClient,
        location_id: str | None = None,
        default_redirect_url: str | None = None,
    ):
        self.payment_links = payment_links
        self.location_id = location_id if location_id is not None else SQUARE_LOCATION_ID
        self.default_redirect_url = (
            default_redirect_url if default_redirect_url is not None else DEFAULT_REDIRECT_URL
        )

    def build_order_request(
        self,
        line_items: List[Dict[str, Any]],
        redirect_url: str | None = None,
    ) -> Dict[str, Any]:
        if not line_items:
            raise CheckoutValidationError("No items provided for checkout")
        if not self.location_id:
            raise RuntimeError("SQUARE_LOCATION_ID is not configured")

        checkout_options: Dict[str, Any] = {"ask_for_shipping_address": True}
        target = redirect_url or self.default_redirect_url
        if target:
            checkout_options["redirect_url"] = target

        #nowy klucz przy kazdym wyslaniu, dwa submity tego samego koszyka = dwa zamowienia
        return {
            "idempotency_key": str(uuid.uuid4()),
            "order": {
                "location_id": self.location_id,
                "line_items": line_items,
            },
            "checkout_options": checkout_options,
        }

    def create_checkout(self, checkout_input: CheckoutInput) -> str:
        line_items = checkout_input.line_items()
        logger.info(
            f"Checkout from {checkout_input.source}: {len(line_items)} valid line item(s)"
        )

        body = self.build_order_request(line_items, checkout_input.redirect_url)
        data = self.payment_links.create_payment_link(body)

        payment_link = data.get("payment_link") if isinstance(data, dict) else None
        url = payment_link.get("url") if isinstance(payment_link, dict) else None
        if not url or not isinstance(url, str):
            raise MissingCheckoutUrlError("No checkout URL returned")

        logger.info(f"Payment link created for order {body['idempotency_key']}")
        return url
