"""
FastAPI application entry point for the landed pricing API.

Run with:
    uvicorn landed_pricing.webapp.main:app --reload

Open: http://127.0.0.1:8000/docs
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from landed_pricing import __version__
from landed_pricing.utils.logging_config import setup_logging
from landed_pricing.webapp.exceptions import AppException
from landed_pricing.webapp.routes import get_app_config, router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    config = get_app_config()
    setup_logging(config.logging)
    logger.info(f"Landed Pricing API starting (settings: {config.paths.settings_file})")
    yield
    logger.info("Landed Pricing API shutting down...")


app = FastAPI(
    title="Landed Pricing API",
    description="Landed-cost retail pricing for imported products",
    version=__version__,
    lifespan=lifespan,
)


@app.middleware("http")
async def error_handling_middleware(request: Request, call_next):
    """Global error handling middleware."""
    start_time = time.time()
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.exception(f"Unhandled error processing {request.url.path}: {e}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(e) if app.debug else "An unexpected error occurred",
                "path": str(request.url.path),
            },
            headers={"X-Process-Time": str(process_time)},
        )


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Return application errors as JSON with their status code."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health/simple")
async def simple_health_check() -> dict[str, Any]:
    """Simple health check for load balancers."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(router)


if __name__ == "__main__":
    import uvicorn

    server = get_app_config().server
    uvicorn.run("landed_pricing.webapp.main:app", host=server.host, port=server.port, reload=True)
