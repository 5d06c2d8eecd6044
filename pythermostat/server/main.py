"""
pyThermostat Server - Main FastAPI Application

A small REST API over an in-memory home of thermostats.

Routing Structure:

    1. Direct app routes (registered on the app):
       - GET  /               -> Index page (plain text)
       - GET  /health         -> Health check

    2. Thermostat API (prefix: settings.api_prefix, default /v1):
       - GET  /v1/thermostats               -> List thermostats
       - POST /v1/thermostats               -> Create a thermostat
       - GET  /v1/thermostats/{id}          -> Get a thermostat
       - PUT  /v1/thermostats/{id}          -> Update a thermostat
       - GET  /v1/thermostats/{id}/{field}  -> Get one property

    3. Documentation:
       - /docs, /redoc, /openapi.json

Application State:

    create_app() builds one ThermostatStore (unless one is passed in) and
    keeps it on app.state.store next to app.state.settings. Handlers reach
    both through dependencies, so separate apps never share a home.

Running:

    python -m pythermostat server
    uvicorn --factory pythermostat.server.main:create_app
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from pythermostat.exceptions import ThermostatAPIError
from pythermostat.server.api import thermostats
from pythermostat.server.config import SERVER_VERSION, Settings
from pythermostat.server.config import settings as default_settings
from pythermostat.server.core.store import ThermostatStore

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    settings = app.state.settings
    logger.info(f"Starting pyThermostat Server v{SERVER_VERSION}...")
    logger.info(f"Home has {len(app.state.store)} thermostat(s)")
    logger.info(f"API prefix: {settings.api_prefix}")
    logger.info(f"Server listening on {settings.server_host}:{settings.server_port}")

    yield

    # Shutdown
    logger.info("Shutting down pyThermostat Server...")


async def thermostat_error_handler(request: Request, exc: ThermostatAPIError):
    return JSONResponse(status_code=exc.code, content=exc.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render routing errors (unknown path, wrong method) in the API error shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": exc.status_code,
            "message": str(exc.detail),
            "description": f"{request.method} {request.url.path}",
        },
        headers=getattr(exc, "headers", None),
    )


def create_app(store: Optional[ThermostatStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        store: Home to serve; a new (seeded per settings.seed) store if omitted
        settings: Settings to use; the environment-loaded settings if omitted
    """
    settings = settings or default_settings
    configure_logging(settings.debug)

    if store is None:
        store = ThermostatStore(seed=settings.seed)

    app = FastAPI(
        title="pyThermostat Server",
        description="REST API for the thermostats of a home",
        version=SERVER_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )
    app.state.store = store
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ThermostatAPIError, thermostat_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(thermostats.router, prefix=settings.api_prefix, tags=["Thermostats"])

    @app.get("/", response_class=PlainTextResponse, tags=["Index"])
    def index():
        """Serve the index of the API."""
        return "Index Page"

    @app.get("/health", tags=["Health"])
    def health_check(request: Request):
        """Health check endpoint.

        Returns:
            - status: "healthy" when the home has thermostats, "empty" otherwise
            - version: Server version
            - thermostats: Number of thermostats in the home
        """
        count = len(request.app.state.store)
        return {
            "status": "healthy" if count else "empty",
            "version": SERVER_VERSION,
            "thermostats": count,
        }

    return app
