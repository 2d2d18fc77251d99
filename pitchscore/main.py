"""
PitchScore — FastAPI application entry-point.

Run with:
    pitchscore-server
or:
    uvicorn pitchscore.main:create_app --factory --reload
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError as SettingsError
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from pitchscore import __version__
from pitchscore.config import Settings, get_settings
from pitchscore.database import build_engine, build_sessionmaker, create_tables
from pitchscore.exception_handlers import setup_exception_handlers
from pitchscore.services.security import build_password_hasher

# ── Import routers ──
from pitchscore.routers import auth, ideas, users

logger = logging.getLogger(__name__)


# ── Lifespan: open the pool and create tables on startup, close it on shutdown ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = build_engine(app.state.settings)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    try:
        await create_tables(engine)
        yield
    finally:
        await engine.dispose()
        logger.info("Database connections closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around one settings object (the composition root)."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Submit a startup pitch and get a simulated strengths/weaknesses assessment.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.password_hasher = build_password_hasher(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))

    setup_exception_handlers(app)

    # ── Register API routers ──
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(ideas.router)

    @app.get("/api/health", tags=["health"])
    async def health():
        return {"status": "ok"}

    return app


def run() -> None:
    """Console entry-point: load config, serve, exit non-zero on startup failure."""
    try:
        settings = get_settings()
    except SettingsError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Missing or invalid configuration: {e}")
        sys.exit(1)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings)
    try:
        uvicorn.run(app, host=settings.HOST, port=settings.PORT)
    except (Exception, SystemExit) as e:
        logger.error(f"Could not start server on {settings.HOST}:{settings.PORT}: {e}")
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            asyncio.run(engine.dispose())
        sys.exit(1)
    logger.info("Server stopped")


if __name__ == "__main__":
    run()
