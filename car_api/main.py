"""
Main FastAPI application entry point.
"""
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from car_api.config import Settings, get_settings
from car_api.database import CarStore, InMemoryUserRepository, JsonFileCarStore, UserRepository, init_db
from car_api.exceptions import CarApiError
from car_api.middleware import register_middleware
from car_api.routers import auth, cars

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events for the application.
    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    init_db(app.state.car_store)
    logger.info("Interactive docs at %s", settings.docs_url)

    yield

    logger.info("Shutting down %s", settings.app_name)


def create_app(
    settings: Optional[Settings] = None,
    *,
    users: Optional[UserRepository] = None,
    car_store: Optional[CarStore] = None,
) -> FastAPI:
    """
    Build the application.

    ``users`` and ``car_store`` default to a fresh in-memory user list and
    the JSON file named by ``settings.cars_file``.
    """
    settings = settings or get_settings()
    configure_logging(settings.debug)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    ## Car API

    CRUD operations over cars, plus registration and login.

    All `/api/cars` endpoints require an `Authorization: Bearer <token>`
    header; obtain a token from `/auth/login`.
    """,
        lifespan=lifespan,
        docs_url=settings.docs_url,
        redoc_url=None,
    )

    app.state.settings = settings
    app.state.users = users if users is not None else InMemoryUserRepository()
    app.state.car_store = car_store if car_store is not None else JsonFileCarStore(
        settings.cars_file, fail_closed=settings.persistence_fail_closed
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middleware(app)

    @app.exception_handler(CarApiError)
    async def car_api_error_handler(request: Request, exc: CarApiError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    # Include routers
    app.include_router(auth.router)
    app.include_router(cars.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": settings.docs_url,
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "car_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
