# foodorder/api/__init__.py
from fastapi import FastAPI

from foodorder.api.routers import auth, carts, categories, dishes, health, orders, restaurants, users


def include_routers(app: FastAPI) -> None:
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(restaurants.router)
    app.include_router(categories.router)
    app.include_router(dishes.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
