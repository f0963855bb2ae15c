"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
      or: cashcard-api   (uvloop event loop, LOG_LEVEL from settings)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from config.settings import settings
from src.cc_cashcard.api.router import router as cashcard_router
from src.cc_common.database import engine
from src.cc_common.errors import AppError, InternalError, StoreUnavailableError
from src.cc_common.response import error_response
from src.cc_gateway.api.router import router as auth_router
from src.cc_gateway.middleware.request_log import RequestLogMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB connection. Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


def _error_json(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_json(request, exc)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Store failure on [%s] %s", request.method, request.url.path, exc_info=exc
    )
    return _error_json(request, StoreUnavailableError())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: the envelope never carries exception details."""
    logger.error(
        "Unhandled error on [%s] %s", request.method, request.url.path, exc_info=exc
    )
    return _error_json(request, InternalError())


app.include_router(auth_router)
app.include_router(cashcard_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}


def run() -> None:
    """Console entry point: configure logging and serve on uvloop."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "src.main:app",
        host=settings.HOST,
        port=settings.PORT,
        loop="uvloop",
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
