"""FastAPI application entry point
Wires configuration, logging, error handlers and the asset routers together.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fintrack.api.routes import router
from fintrack.config import CORS_ORIGINS, LOG_LEVEL
from fintrack.database.config import init_db
from fintrack.logging_config import configure_logging
from fintrack.services.errors import AssetError

configure_logging(LOG_LEVEL)
logger = logging.getLogger("fintrack.api")


@asynccontextmanager
async def _create_tables(app: FastAPI):
    init_db()
    yield


def create_app(create_tables: bool = True) -> FastAPI:
    app = FastAPI(
        lifespan=_create_tables if create_tables else None,
        title="FinTrack Assets API",
        description="Asset hierarchy valuation, depreciation and net worth",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=CORS_ORIGINS != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("[API] invalid payload on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid payload"})

    @app.exception_handler(AssetError)
    async def asset_error_handler(request: Request, exc: AssetError):
        if exc.status_code >= 500:
            logger.error("[API] %s on %s %s", exc.message, request.method, request.url.path)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # Anything else is a bug: log it with the traceback, answer 500
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("[API] unhandled %s on %s %s", type(exc).__name__, request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "type": type(exc).__name__},
        )

    app.include_router(router, prefix="/api")

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
