"""
XNDoughs Reservations - FastAPI Backend Application
"""

import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from app.config import Settings, settings
from app.database import close_connection, ensure_indexes, get_database
from app.logging_config import configure_logging
from app.api import reservations, system
from app.maintenance import DatabaseMaintenance, MaintenanceScheduler
from app.models.reservation import ReservationStore
from app.notifications import get_notification_manager

configure_logging()

logger = structlog.get_logger()


def format_validation_errors(exc: RequestValidationError) -> str:
    """One line per invalid field, e.g. ``phone: Value error, ...``"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages)


def build_lifespan(config: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        logger.info("Starting XNDoughs API", version="1.0.0", environment=config.environment)

        try:
            await ensure_indexes(get_database())
        except PyMongoError as e:
            logger.warning("Could not create indexes at startup", error=str(e))

        scheduler = None
        if config.enable_db_monitoring:
            logger.info("Initializing database monitoring")
            maintenance = DatabaseMaintenance(
                ReservationStore(get_database()),
                get_notification_manager(),
            )
            scheduler = MaintenanceScheduler(
                maintenance,
                cleanup_hour=config.cleanup_hour,
                archive_hour=config.archive_hour,
            )
            scheduler.start()
        app.state.scheduler = scheduler

        yield

        logger.info("Shutting down XNDoughs API")
        if scheduler is not None:
            await scheduler.stop()
        await close_connection()

    return lifespan


def register_exception_handlers(app: FastAPI, config: Settings) -> None:
    """Every error response is a JSON body with a ``message`` field"""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": format_validation_errors(exc)})

    async def server_error_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled error",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        content = {"message": "Something went wrong!"}
        if config.is_development:
            content["stack"] = "".join(traceback.format_exception(exc))
        return JSONResponse(status_code=500, content=content)

    app.add_exception_handler(PyMongoError, server_error_handler)
    app.add_exception_handler(Exception, server_error_handler)


def create_app(config: Settings = settings) -> FastAPI:
    """Build the application for the given configuration"""
    app = FastAPI(
        title="XNDoughs Reservations",
        description="Pickup reservations for the XNDoughs branches",
        version="1.0.0",
        lifespan=build_lifespan(config),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"],
    )

    register_exception_handlers(app, config)

    @app.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/api/health")

    app.include_router(system.router, prefix="/api", tags=["System"])
    app.include_router(reservations.router, prefix="/api/reservations", tags=["Reservations"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.api_host,
        port=settings.port,
        reload=settings.api_debug,
    )
