# storefront/api/__init__.py
from fastapi import FastAPI
from storefront.api.routers import carts, checkout, products
from storefront.api.routers.health import router as health_router


def include_routers(app: FastAPI) -> FastAPI:
    app.include_router(health_router)
    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(checkout.router)
    return app
