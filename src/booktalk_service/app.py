from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from booktalk_service.api.middleware.request_context import RequestContextMiddleware
from booktalk_service.api.v1.routers import books, health, messages, users, ws
from booktalk_service.application.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from booktalk_service.config import settings
from booktalk_service.infrastructure.ws.manager import ChannelManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.redis = aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )
    logger.info("Redis connection pool created")

    yield

    await app.state.redis.aclose()
    logger.info("Redis connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="BookTalk Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    # Live connections only; clients reconnect after a restart.
    app.state.channels = ChannelManager()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(messages.router)
    app.include_router(users.router)
    app.include_router(books.router)
    app.include_router(ws.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def _bad_request(req: Request, exc: RequestValidationError) -> JSONResponse:
        # Body, path and query errors share the 400 contract; field names only.
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()})
        logger.debug("Rejected %s %s: %s", req.method, req.url.path, fields)
        return JSONResponse(
            status_code=400,
            content={"detail": "Invalid request", "fields": [f for f in fields if f]},
        )

    @app.exception_handler(AuthError)
    async def _unauthorized(_req: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(
            status_code=401,
            content={"detail": exc.detail},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ForbiddenError)
    async def _forbidden(_req: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": exc.detail})

    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ConflictError)
    async def _conflict(_req: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": exc.detail})

    @app.exception_handler(StorageError)
    async def _storage(req: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure on %s %s: %s", req.method, req.url.path, exc.detail)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
