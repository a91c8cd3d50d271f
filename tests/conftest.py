import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SQUARE_LOCATION_ID"] = "LOC123"
os.environ["PUBLIC_BASE_URL"] = "https://bakery.test"

from dataclasses import dataclass, field
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.routers import checkout, products
from storefront.data.database import Base, get_db
from storefront.data.models import CartStoreModel  # noqa: F401
from storefront.main import create_app
from storefront.repos import cart_repo
from storefront.services.catalog_service import CatalogService
from storefront.services.checkout_service import CheckoutService

CHECKOUT_URL = "https://square.link/u/abc123"


@dataclass
class FakePaymentLinkClient:
    response: Any = field(default_factory=lambda: {"payment_link": {"url": CHECKOUT_URL}})
    error: Exception | None = None
    calls: list[dict] = field(default_factory=list)

    def create_payment_link(self, body: dict) -> Any:
        self.calls.append(body)
        if self.error:
            raise self.error
        return self.response


@dataclass
class FakeCatalogClient:
    objects: list[dict] = field(default_factory=list)
    by_id: dict[str, dict] = field(default_factory=dict)
    error: Exception | None = None

    def list_catalog(self) -> list[dict]:
        if self.error:
            raise self.error
        return self.objects

    def retrieve_object(self, object_id: str) -> dict | None:
        if self.error:
            raise self.error
        return self.by_id.get(object_id)


@pytest.fixture(autouse=True)
def clear_memory_stores():
    cart_repo._MEMORY_STORES.clear()
    yield
    cart_repo._MEMORY_STORES.clear()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def payment_links():
    return FakePaymentLinkClient()


@pytest.fixture
def catalog_client():
    return FakeCatalogClient()


@pytest.fixture
def app(session_factory, payment_links, catalog_client):
    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[checkout.get_service] = lambda: CheckoutService(
        payment_links,
        location_id="LOC123",
        default_redirect_url="https://bakery.test/thanks",
    )
    app.dependency_overrides[products.get_service] = lambda: CatalogService(catalog_client)
    return app


@pytest.fixture
def client(app):
    return TestClient(app, follow_redirects=False)
