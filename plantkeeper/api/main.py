"""PlantKeeper FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from plantkeeper.api.routers import care, plants, sites, user
from plantkeeper.core.config import get_settings
from plantkeeper.core.garden import GardenService
from plantkeeper.core.storage import StorageError
from plantkeeper.models import Base
from plantkeeper.models.base import create_session_factory

logger = logging.getLogger("plantkeeper.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - startup and shutdown."""
    settings = get_settings()

    from plantkeeper.core import setup_logging
    setup_logging(settings.log_level)

    engine, SessionFactory = create_session_factory(settings.database_url)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized")

    garden = GardenService(settings, SessionFactory)
    garden.initialize()
    app.state.garden = garden

    logger.info(f"PlantKeeper started on http://{settings.host}:{settings.port}")
    yield

    engine.dispose()
    logger.info("PlantKeeper shutdown complete")


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


def create_app() -> FastAPI:
    app = FastAPI(
        title="PlantKeeper",
        description="Track plants across sites and see which ones need water or fertilizer",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StorageError, storage_error_handler)

    app.include_router(sites.router, prefix="/api/sites", tags=["sites"])
    app.include_router(plants.router, prefix="/api/plants", tags=["plants"])
    app.include_router(care.router, prefix="/api/care", tags=["care"])
    app.include_router(user.router, prefix="/api", tags=["user"])

    @app.get("/health", tags=["system"])
    async def health():
        return {"status": "ok", "service": "plantkeeper", "version": "1.0.0"}

    return app


app = create_app()
