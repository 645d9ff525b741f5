# foodorder/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from foodorder.api import include_routers
from foodorder.data.database import Base, init_db
from foodorder.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Initializing database...")
    try:
        init_db()
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info(f"Tables ready: {sorted(Base.metadata.tables.keys())}")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Food Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    include_routers(app)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
