# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, List


class CartLineIn(BaseModel):
    """Schema dla dodawania/zmiany ilosci linii w koszyku."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1, description="Klucz linii, zwykle <productId>:<variationId>")
    product_id: str | None = Field(None, alias="productId")
    variation_id: str | None = Field(None, alias="variationId")
    name: str = ""
    price: float = Field(0, ge=0, allow_inf_nan=False, description="Cena w dolarach, nie w centach")
    qty: int | None = Field(None, description="Delta ilosci, brak = +1, ujemna zmniejsza")
    currency: str = "USD"
    note: str | None = None
    image: str | None = None

    def to_line(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    items: List[Any]
    count: int | float
    subtotal: float
    currency: str


class CheckoutPayloadItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    variation_id: str = Field(..., alias="variationId")
    qty: int | float | None = None
    note: str | None = None
    price: float | None = None
    currency: str = "USD"


class CheckoutPayloadOut(BaseModel):
    items: List[CheckoutPayloadItem]


class CartPayload(BaseModel):
    """Body checkoutu, linie walidowane dopiero przy budowaniu line items."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[Any] | None = None
    redirect_url: str | None = Field(None, alias="redirectUrl")


class Variation(BaseModel):
    id: str
    name: str
    price: float | None = None
    currency: str = "USD"


class Product(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: float | None = None
    currency: str = "USD"
    image: str | None = None
    variations: List[Variation] = []


class HealthOut(BaseModel):
    status: str
