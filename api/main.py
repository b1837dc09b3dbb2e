from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from core import db
from core.errors import install_error_handlers
from core.logging import configure_logging
from core.settings import Settings, load_settings
from users import router as users_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, database: db.Database | None = None) -> FastAPI:
    """
    Build the API. Pass `database` to reuse an existing pool (tests); otherwise
    the lifespan opens one from `settings` and owns it.
    """
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Open the DB pool once per process.
        owned = database is None
        app.state.database = await db.connect(settings) if owned else database
        try:
            yield
        finally:
            if owned:
                await app.state.database.close()
            app.state.database = None

    app = FastAPI(title="users-api", lifespan=lifespan)
    install_error_handlers(app)
    app.include_router(users_router.router, tags=["users"])

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        return "User CRUD API is running"

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


# `uvicorn main:app` entry point.
app = create_app()


if __name__ == "__main__":
    settings = load_settings()
    logger.info("starting host=%s port=%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
