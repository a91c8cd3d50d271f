# storefront/domain/errors.py
from typing import Any


class CheckoutValidationError(ValueError):
    """Brak identyfikatora albo zadnej poprawnej linii (400)."""


class PaymentProviderError(Exception):
    """Square odrzucil request, status i body przekazujemy dalej bez zmian."""

    def __init__(self, status_code: int, body: Any):
        super().__init__(f"Payment provider returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class MissingCheckoutUrlError(RuntimeError):
    """Odpowiedz 2xx bez payment_link.url."""
