# juliaydavid/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware

from juliaydavid.api.router import api_router
from juliaydavid.core.config import Settings, get_settings
from juliaydavid.core.context import build_context
from juliaydavid.core.errors import register_exception_handlers
from juliaydavid.db.init_db import init_models, seed_initial_data
from juliaydavid.storage.blobs import BlobStore

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, blobs: Optional[BlobStore] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx = build_context(settings, blobs=blobs)
    use_local_blobs = settings.BLOB_BACKEND.lower() == "local"

    # --- Startup: tables, accounts and default texts. Shutdown: close the pool.
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        missing = settings.missing_settings()
        if missing:
            logger.error("Missing configuration: %s", ", ".join(missing))
        if use_local_blobs:
            Path(settings.LOCAL_BLOB_DIR).mkdir(parents=True, exist_ok=True)
        await init_models(ctx.store.engine)
        await seed_initial_data(ctx)
        yield
        await ctx.store.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.PROJECT_VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.ctx = ctx

    # Set up CORS
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app, settings.expose_error_details)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    if use_local_blobs:
        app.mount(
            settings.LOCAL_BLOB_URL,
            StaticFiles(directory=settings.LOCAL_BLOB_DIR, check_dir=False),
            name="uploads",
        )

    @app.get("/")
    def root():
        return {"message": f"{settings.PROJECT_NAME} API"}

    return app


app = create_app()
