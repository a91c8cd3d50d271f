# storefront/repos/cart_repo.py
import copy
from collections import OrderedDict
from typing import Any, Dict, Tuple

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.cart_store import CartStoreModel
from storefront.domain.cart import CART_SCHEMA_VERSION
from storefront.utils.settings import CART_STORE_NAME, MEMORY_CART_LIMIT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

#fallback gdy baza nie dziala, wspolny dla calego procesu
#ograniczony do MEMORY_CART_LIMIT, najdawniej zapisane koszyki wypadaja pierwsze
_MEMORY_STORES: "OrderedDict[Tuple[str, str], Tuple[Dict[str, Any], int]]" = OrderedDict()


def _remember(key: Tuple[str, str], state: Dict[str, Any], version: int) -> None:
    _MEMORY_STORES[key] = (copy.deepcopy(state), version)
    _MEMORY_STORES.move_to_end(key)
    while len(_MEMORY_STORES) > MEMORY_CART_LIMIT:
        evicted, _ = _MEMORY_STORES.popitem(last=False)
        logger.warning(f"Memory cart limit reached, dropping cart {evicted[1]}")


def _empty_state() -> Dict[str, Any]:
    return {"items": [], "count": 0}


class CartRepo:
    """
    Zapisany stan koszyka per (nazwa store, sesja) z wersja schematu.
    Blad bazy przelacza repo na pamiec, mutacje koszyka nie failuja.
    """

    def __init__(self, db: Session | None, name: str | None = None):
        self.db = db
        self.name = name or CART_STORE_NAME

    def _switch_to_memory(self, reason: Exception) -> None:
        logger.warning(f"Cart store {self.name} falls back to memory: {reason}")
        if self.db is not None:
            try:
                self.db.rollback()
            except SQLAlchemyError as rollback_error:
                logger.warning(f"Rollback failed: {rollback_error}")
        self.db = None

    def _memory_key(self, session_id: str) -> Tuple[str, str]:
        return (self.name, session_id)

    def _get_row(self, session_id: str) -> CartStoreModel | None:
        return self.db.execute(
            select(CartStoreModel).where(
                CartStoreModel.name == self.name,
                CartStoreModel.session_id == session_id,
            )
        ).scalar_one_or_none()

    def load(self, session_id: str) -> Tuple[Dict[str, Any], int]:
        if self.db is not None:
            try:
                row = self._get_row(session_id)
            except SQLAlchemyError as e:
                self._switch_to_memory(e)
            else:
                #koszyk zapisany w pamieci podczas awarii jest nowszy niz wiersz w bazie
                if self._memory_key(session_id) in _MEMORY_STORES:
                    state, version = _MEMORY_STORES[self._memory_key(session_id)]
                    return copy.deepcopy(state), version
                if row is None:
                    return _empty_state(), CART_SCHEMA_VERSION
                return copy.deepcopy(row.state), row.version

        stored = _MEMORY_STORES.get(self._memory_key(session_id))
        if stored is None:
            return _empty_state(), CART_SCHEMA_VERSION
        state, version = stored
        return copy.deepcopy(state), version

    def save(self, session_id: str, state: Dict[str, Any], version: int) -> None:
        if self.db is not None:
            try:
                row = self._get_row(session_id)
                if row is None:
                    row = CartStoreModel(name=self.name, session_id=session_id)
                    self.db.add(row)
                #nowy obiekt, zeby SQLAlchemy zauwazyl zmiane kolumny JSON
                row.state = copy.deepcopy(state)
                row.version = version
                self.db.commit()
                #baza znowu dziala, kopia z pamieci niepotrzebna
                _MEMORY_STORES.pop(self._memory_key(session_id), None)
                return
            except SQLAlchemyError as e:
                self._switch_to_memory(e)

        _remember(self._memory_key(session_id), state, version)
