from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker

import ign_check.db.models  # noqa: F401
from ign_check.api.middleware import install_request_logging
from ign_check.api.responses import fail
from ign_check.api.routes import games, ign, stats
from ign_check.api.service import LookupService
from ign_check.core.cache import TTLCache
from ign_check.core.config import Settings, settings
from ign_check.core.logging import configure_logging
from ign_check.db import Base, DatabaseConfig, create_db_engine, create_session_factory
from ign_check.lookup.dispatcher import LookupDispatcher
from ign_check.lookup.providers.codashop.client import CodashopClient

logger = logging.getLogger(__name__)


def create_app(
    *,
    cfg: Settings = settings,
    dispatcher: LookupDispatcher | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> FastAPI:
    """
    Build the HTTP app.

    Tests pass their own dispatcher (mock transport) and session factory; the
    defaults talk to the real storefront and the configured database.
    """

    engine = None
    if session_factory is None:
        engine = create_db_engine(DatabaseConfig(database_url=cfg.database_url, echo=cfg.db_echo))
        session_factory = create_session_factory(engine)

    owns_client = dispatcher is None
    if dispatcher is None:
        dispatcher = LookupDispatcher.with_default_games(CodashopClient.from_settings(cfg))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if engine is not None:
            Base.metadata.create_all(engine)
        logger.info("serving %d games", len(dispatcher.registry))
        yield
        if owns_client and isinstance(dispatcher.client, CodashopClient):
            dispatcher.client.close()
        if engine is not None:
            engine.dispose()

    app = FastAPI(title="IGN Check API", version="2.0.0", lifespan=lifespan)
    app.state.session_factory = session_factory
    app.state.lookup_service = LookupService(
        dispatcher=dispatcher,
        cache=(
            TTLCache(default_ttl_s=cfg.cache_ttl_s, max_entries=cfg.cache_max_entries)
            if cfg.cache_ttl_s > 0
            else None
        ),
        session_factory=session_factory if cfg.store_lookups else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origin_list(),
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    install_request_logging(app)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [
            {"path": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return fail(400, "ValidationError", "Validation error", request=request, details=details)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(games.router)
    app.include_router(ign.router)
    app.include_router(stats.router)
    return app


def main_app() -> FastAPI:
    """uvicorn factory entry point (``ign_check.api.app:main_app``)."""

    configure_logging(settings.log_level)
    return create_app()
