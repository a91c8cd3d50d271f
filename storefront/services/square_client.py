# storefront/services/square_client.py
from typing import Any, Dict, List

import requests

from storefront.domain.errors import PaymentProviderError
from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    SQUARE_BASE_URL,
    SQUARE_ACCESS_TOKEN,
    SQUARE_API_VERSION,
    HTTP_TIMEOUT_SECONDS,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class SquareClient:
    def __init__(
        self,
        base_url: str | None = None,
        access_token: str | None = None,
        api_version: str | None = None,
        timeout: float | None = None,
    ):
        self.base_url = (base_url or SQUARE_BASE_URL).rstrip("/")
        self.access_token = access_token if access_token is not None else SQUARE_ACCESS_TOKEN
        self.api_version = api_version or SQUARE_API_VERSION
        self.timeout = timeout or HTTP_TIMEOUT_SECONDS

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "Square-Version": self.api_version,
        }


class PaymentLinkClient(SquareClient):
    """Online Checkout API. Bez retry: kazde wywolanie to nowe zamowienie."""

    def create_payment_link(self, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}/online-checkout/payment-links"
        logger.info(f"PaymentLinkClient POST {url} idempotency_key={body.get('idempotency_key')}")

        resp = requests.post(url, json=body, headers=self.headers, timeout=self.timeout)

        try:
            data = resp.json()
        except ValueError:
            if resp.ok:
                raise
            data = resp.text

        if not resp.ok:
            logger.warning(f"Square rejected payment link: HTTP {resp.status_code}")
            raise PaymentProviderError(resp.status_code, data)

        return data


class SquareCatalogClient(SquareClient):
    @http_retry()
    def _list_page(self, cursor: str | None) -> Dict[str, Any]:
        url = f"{self.base_url}/catalog/list"
        params = {"types": "ITEM,IMAGE"}
        if cursor:
            params["cursor"] = cursor
        logger.info(f"SquareCatalogClient GET {url}")

        resp = requests.get(url, params=params, headers=self.headers, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def list_catalog(self) -> List[Dict[str, Any]]:
        objects: List[Dict[str, Any]] = []
        cursor = None
        while True:
            page = self._list_page(cursor)
            objects.extend(page.get("objects") or [])
            cursor = page.get("cursor")
            if not cursor:
                return objects

    @http_retry()
    def retrieve_object(self, object_id: str) -> Dict[str, Any] | None:
        url = f"{self.base_url}/catalog/object/{object_id}"
        logger.info(f"SquareCatalogClient GET {url}")

        resp = requests.get(
            url,
            params={"include_related_objects": "true"},
            headers=self.headers,
            timeout=self.timeout,
        )
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()
