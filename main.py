"""
Asset Maintenance API application factory and router wiring.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from core.errors import register_exception_handlers
from core.logging import configure_logging
from core.middleware import RequestIdMiddleware
from db import init_db
from api.auth.views import router as auth_router
from api.assets.views import router as assets_router
from api.dashboard.views import router as dashboard_router
from api.maintenances.views import router as maintenances_router

configure_logging(settings.LOG_LEVEL, env=settings.APP_ENV)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        await init_db()
    logger.info("app.started", extra={"extra_data": {"env": settings.APP_ENV}})
    yield
    logger.info("app.stopped")


def create_app() -> FastAPI:
    application = FastAPI(
        title="Asset Maintenance API",
        description="Track personal assets and their maintenance schedules",
        version="1.0.0",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestIdMiddleware)
    register_exception_handlers(application)

    application.include_router(auth_router, prefix="/api")
    application.include_router(assets_router, prefix="/api")
    # Registered before the maintenances router so /maintenances/summary is matched first
    application.include_router(dashboard_router, prefix="/api")
    application.include_router(maintenances_router, prefix="/api")

    @application.get("/", tags=["system"])
    async def root():
        return {"message": "Asset Maintenance API is running."}

    @application.get("/health", tags=["system"])
    async def health_check():
        return {"status": "healthy"}

    return application


app = create_app()
