import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .deck import validate_deck
from .routes.catalog_routes import router as catalog_router
from .routes.profile_routes import router as profile_router
from .routes.reading_routes import router as reading_router
from .session_manager import SessionManager
from .storage.sessions_db import SessionStore, SessionStoreError
from .utils.rng import seeded_random

log = logging.getLogger("taro_ritual.app")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        validate_deck()
        store = SessionStore(settings.db_path)
        try:
            await store.init()
        except SessionStoreError as e:
            # Keep serving from memory; every later write will fail and be logged.
            log.warning("Session store unavailable: %s", e)

        rng = seeded_random(settings.draw_seed) if settings.draw_seed else random.Random()
        manager = SessionManager(store, rng=rng)
        await manager.refresh_history()
        await manager.load_profile()
        app.state.manager = manager
        yield
        await manager.drain()

    app = FastAPI(title="Taro Ritual", version="0.1.0", lifespan=lifespan)

    app.include_router(catalog_router)
    app.include_router(reading_router)
    app.include_router(profile_router)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
