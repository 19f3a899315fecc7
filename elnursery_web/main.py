"""FastAPI main application for the Elnursery admin backend"""

from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from elnursery import __version__
from elnursery.app import ElnurseryApp
from elnursery.utils.config import config_manager
from elnursery.utils.exceptions import DomainError
from elnursery.utils.logger import configure_logging, get_logger

from . import deps
from .access import access_gate
from .admin_routes import router as admin_router
from .auth_routes import router as auth_router
from .child_routes import router as child_router
from .maintenance_scheduler import start_maintenance_scheduler, stop_maintenance_scheduler
from .password_routes import router as password_router
from .task_routes import router as task_router
from .user_routes import router as user_router

logger = get_logger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(instance: Optional[ElnurseryApp] = None) -> FastAPI:
    """
    Build the FastAPI application.

    With ``instance`` given the app uses it as-is, and startup does not
    connect, bootstrap or schedule anything.
    """
    settings = instance.settings if instance is not None else config_manager.settings

    app = FastAPI(
        title="Elnursery Admin API",
        description="Administrative backend for the Elnursery platform",
        version=__version__,
    )

    # Starlette echoes the request origin for credentialed requests when "*" is allowed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainError, domain_error_handler)

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(user_router)
    app.include_router(child_router)
    app.include_router(task_router)
    app.include_router(password_router)

    @app.get("/health")
    async def health(_: Any = Depends(access_gate("health"))):
        return {"status": "ok", "version": __version__}

    if instance is not None:
        deps.set_app_instance(instance)
        return app

    @app.on_event("startup")
    async def startup_event():
        """Connect, bootstrap the owner admin and start the daily job"""
        configure_logging(settings.logging.level, settings.logging.format)
        elnursery_app = ElnurseryApp(settings)
        app.state.elnursery = elnursery_app
        deps.set_app_instance(elnursery_app)
        elnursery_app.bootstrap()

        if settings.maintenance.enabled:
            try:
                start_maintenance_scheduler(elnursery_app)
            except Exception as e:
                logger.error("Failed to start maintenance scheduler", error=str(e), exc_info=True)

        logger.info("Elnursery startup completed", environment=settings.app.environment)

    @app.on_event("shutdown")
    async def shutdown_event():
        """Cleanup on shutdown"""
        logger.info("Shutdown event triggered - stopping all services")
        stop_maintenance_scheduler()

        elnursery_app = getattr(app.state, "elnursery", None)
        deps.set_app_instance(None)
        if elnursery_app is not None:
            elnursery_app.close()

    return app
