# shopapi/api/__init__.py
from fastapi import FastAPI

from shopapi.api.routers import auth, cart, categories, health, orders, products


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(auth.legacy_router)
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
