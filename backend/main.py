"""
FastAPI Backend

API server for the professor portfolio site: public profile, publications,
projects, courses, awards, students and uploaded files, with an admin login
gating every write.
"""

# Load .env FIRST, before any imports that read settings.
from pathlib import Path
from dotenv import load_dotenv

_project_root = Path(__file__).resolve().parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(dotenv_path=_env_file)
else:
    load_dotenv()  # fallback: current directory

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.app.api.entities import routers as entity_routers
from backend.app.api.files import router as files_router
from backend.app.api.platform import router as platform_router
from backend.app.api.profile import router as profile_router
from backend.app.core.auth.admin_auth import router as auth_router
from backend.app.core.config import Settings, get_settings
from backend.app.core.db.mongo import ClientFactory, MongoConnectionCache
from backend.app.core.errors import PortfolioError
from backend.app.core.middleware import setup_middleware
from backend.app.observability.logging import log_event, setup_logging
from backend.app.storage.object_store import BucketFactory


def _register_exception_handlers(app: FastAPI):
    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        server_side = exc.status_code >= 500
        log_event(
            "request_failed",
            severity="error" if server_side else "info",
            exc_info=exc if server_side else None,
            request_id=getattr(request.state, "request_id", ""),
            path=request.url.path,
            status=exc.status_code,
            error_class=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        log_event(
            "request_rejected",
            request_id=getattr(request.state, "request_id", ""),
            path=request.url.path,
            error=str(exc.errors()),
        )
        return JSONResponse(status_code=400, content={"error": "Missing or invalid request fields"})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        log_event(
            "unhandled_exception",
            severity="error",
            exc_info=exc,
            request_id=getattr(request.state, "request_id", ""),
            path=request.url.path,
            error_class=type(exc).__name__,
            error=str(exc),
        )
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    client_factory: Optional[ClientFactory] = None,
    bucket_factory: Optional[BucketFactory] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    overrides = {}
    if client_factory is not None:
        overrides["client_factory"] = client_factory
    if bucket_factory is not None:
        overrides["bucket_factory"] = bucket_factory
    mongo = MongoConnectionCache(settings, **overrides)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        log_event("app_started", app_env=settings.app_env, database=settings.mongo_db_name)
        yield
        await mongo.close()

    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.state.settings = settings
    app.state.mongo = mongo

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_middleware(app)
    _register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(profile_router)
    for router in entity_routers:
        app.include_router(router)
    app.include_router(files_router)
    app.include_router(platform_router)
    return app


app = create_app()
