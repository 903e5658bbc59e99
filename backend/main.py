import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, settings as default_settings
from core.errors import StoreError
from core.logging_config import setup_logging
from core.realtime import HardwareLogBroadcaster
from db.store import StockStore, create_store
from routers.hardware import router as hardware_router
from routers.health import router as health_router
from routers.realtime import router as realtime_router
from routers.stock import router as stock_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: StockStore = app.state.store
    try:
        await store.start()
        logger.info("%s store ready", store.mode)
    except Exception:
        # Keep serving; requests that need the database will fail with 500
        logger.exception("Store init error")
    yield
    await store.close()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "message": message})


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[StockStore] = None,
    broadcaster: Optional[HardwareLogBroadcaster] = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(
        title="SmartInventory API",
        description="RFID stock in/out and hardware telemetry with live updates",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store or create_store(settings)
    app.state.broadcaster = broadcaster or HardwareLogBroadcaster()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return _error(exc.status_code, exc.public_message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, "missing fields")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("%s %s crashed", request.method, request.url.path)
        return _error(500, "server error")

    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(stock_router, prefix="/api", tags=["stock"])
    app.include_router(hardware_router, prefix="/api/hardware", tags=["hardware"])
    app.include_router(realtime_router, tags=["realtime"])

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host=default_settings.host, port=default_settings.port)
