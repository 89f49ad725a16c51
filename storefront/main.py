# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from storefront.api.errors import register_error_handlers
from storefront.api.routers import carts, health, orders, payments, products
from storefront.data.database import Base, engine
from storefront.utils.logging import get_logger

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db():
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app(lifespan=lifespan) -> FastAPI:
    app = FastAPI(
        title="Storefront Checkout Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(carts.router)
    app.include_router(orders.router)
    app.include_router(payments.router)
    app.include_router(products.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
