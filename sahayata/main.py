# sahayata/main.py
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from sahayata import __version__
from sahayata.core.config import Settings, get_settings
from sahayata.core.errors import register_exception_handlers
from sahayata.core.logging import setup_logging
from sahayata.repos import build_repo
from sahayata.routers import donations as donations_router
from sahayata.routers import submissions as submissions_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        repo = build_repo(settings)
        try:
            await repo.ping()
        except Exception:
            logger.critical("Storage connection failed (%s backend)", settings.storage_backend, exc_info=True)
            await repo.close()
            raise
        logger.info("Connected to %s storage", settings.storage_backend)
        app.state.repo = repo

        yield

        await repo.close()
        logger.info("Storage connection closed")

    app = FastAPI(lifespan=lifespan, title=settings.app_name, version=__version__)
    app.state.settings = settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        request_id = uuid.uuid4().hex
        response = await call_next(request)
        logger.info(
            "%s %s -> %s (%.1f ms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            (time.time() - start) * 1000,
            request_id,
        )
        response.headers["X-Request-ID"] = request_id
        return response

    register_exception_handlers(app)

    app.include_router(donations_router.router)    # /api/donate, /api/donations/...
    app.include_router(submissions_router.router)  # /api/feedback, /api/contactus

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "Donation API is running."

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    logger.info("Server is running on http://%s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
