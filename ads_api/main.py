# ads_api/main.py
from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .db import init_db, make_engine, make_session_factory
from .errors import AdsError
from .log import setup_logging
from .routers import ads as ads_router, users as users_router
from .services.locks import KeyedLock
from .services.telegram import TelegramPublisher

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, http_client: httpx.Client | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title="Ads API")

    # --- CORS ---
    allowed_origins = (
        [o.strip() for o in settings.ALLOWED_ORIGINS.split(",")]
        if settings.ALLOWED_ORIGINS
        else ["*"]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- DB ---
    engine = make_engine(settings.DATABASE_URL)
    init_db(engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.publisher = TelegramPublisher(settings, client=http_client)
    app.state.publish_locks = KeyedLock()

    if not settings.telegram_configured:
        logger.warning("TELEGRAM_BOT_TOKEN or TELEGRAM_CHANNEL_ID not set; posting ads will fail")

    # --- Errors ---
    @app.exception_handler(AdsError)
    async def handle_ads_error(request: Request, exc: AdsError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.detail)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # --- Routers ---
    app.include_router(ads_router.router)
    app.include_router(users_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
