#storefront/data/models/cart_store.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, JSON, UniqueConstraint

from storefront.data.database import Base


class CartStoreModel(Base):
    __tablename__ = "cart_stores"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    session_id = Column(String, nullable=False, index=True)

    #wersja schematu zapisanego stanu, nie licznik zmian
    version = Column(Integer, nullable=False, default=0)
    state = Column(JSON, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (UniqueConstraint("name", "session_id", name="u_store_session"),)
