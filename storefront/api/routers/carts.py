#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import CartLineIn, CartOut, CheckoutPayloadOut
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(CartRepo(db))


@router.get("/{session_id}", response_model=CartOut)
def get_cart(session_id: str, svc: CartService = Depends(get_service)):
    return svc.get_cart(session_id)


@router.get("/{session_id}/checkout-payload", response_model=CheckoutPayloadOut)
def get_checkout_payload(session_id: str, svc: CartService = Depends(get_service)):
    return svc.checkout_payload(session_id)


@router.post("/{session_id}/items", response_model=CartOut)
def add_item(
    session_id: str,
    payload: CartLineIn,
    svc: CartService = Depends(get_service),
):
    return svc.add_item(session_id, payload.to_line())


@router.delete("/{session_id}/items/{line_id}", response_model=CartOut)
def remove_item(
    session_id: str,
    line_id: str,
    svc: CartService = Depends(get_service),
):
    return svc.remove_item(session_id, line_id)


@router.delete("/{session_id}", response_model=CartOut)
def clear_cart(session_id: str, svc: CartService = Depends(get_service)):
    return svc.clear_cart(session_id)
