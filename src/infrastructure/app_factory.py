from asyncio import Event
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any, Dict, List, Optional

import anyio
from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from ..modules.common.utils.error_handler import register_exception_handlers
from ..modules.user.services import UserService
from .config.settings import (
    EnvironmentOption,
    Settings,
    get_settings,
)
from .database.session import create_tables, local_session
from .logging import generate_correlation_id, get_logger, reset_correlation_id, set_correlation_id

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"


async def set_threadpool_tokens(number_of_tokens: int = 100) -> None:
    """Configure the number of threadpool tokens for anyio."""
    limiter = anyio.to_thread.current_default_thread_limiter()
    limiter.total_tokens = number_of_tokens


async def seed_admin_user(settings: Settings) -> None:
    """Create the configured administrator account if it is missing."""
    if not (settings.ADMIN_USERNAME and settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD):
        logger.debug("No administrator configured; skipping seed")
        return

    async with local_session() as db:
        await UserService().ensure_admin(settings.ADMIN_USERNAME, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, db)


def lifespan_factory(
    settings: Settings,
    create_tables_on_startup: bool = True,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Factory to create a lifespan async context manager for a FastAPI app.

    Args:
        settings: Application settings
        create_tables_on_startup: Whether to create database tables on startup

    Returns:
        An async context manager for FastAPI's lifespan
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        initialization_complete = Event()
        app.state.initialization_complete = initialization_complete

        await set_threadpool_tokens()

        if create_tables_on_startup:
            await create_tables()
            logger.info("Database tables ready")

        await seed_admin_user(settings)

        initialization_complete.set()
        yield

    return lifespan


async def correlation_id_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    """Tag every log record of a request with its correlation ID.

    Reuses ``X-Correlation-ID`` or ``X-Request-ID`` from the request when
    present and echoes the ID back in the response.
    """
    correlation_id = (
        request.headers.get(CORRELATION_ID_HEADER) or request.headers.get("X-Request-ID") or generate_correlation_id()
    )
    request.state.correlation_id = correlation_id
    token = set_correlation_id(correlation_id)
    try:
        response = await call_next(request)
    finally:
        reset_correlation_id(token)

    response.headers[CORRELATION_ID_HEADER] = correlation_id
    return response


def create_application(
    router: APIRouter,
    settings: Optional[Settings] = None,
    lifespan: Optional[Callable[[FastAPI], AbstractAsyncContextManager[None]]] = None,
    create_tables_on_startup: Optional[bool] = None,
    enable_cors: Optional[bool] = None,
    cors_origins: Optional[List[str]] = None,
    enable_docs_in_production: Optional[bool] = None,
    enable_gzip: Optional[bool] = None,
    title: Optional[str] = None,
    summary: Optional[str] = None,
    description: Optional[str] = None,
    version: Optional[str] = None,
    **kwargs: Any,
) -> FastAPI:
    """Creates and configures a FastAPI application based on the provided settings.

    Explicit arguments win over settings; anything left as None falls back
    to the matching setting.

    Args:
        router: The APIRouter containing the routes for the application
        settings: Application settings (uses get_settings() if None)
        lifespan: Optional lifespan; defaults to ``lifespan_factory(settings)``
        create_tables_on_startup: Defaults to settings.CREATE_TABLES_ON_STARTUP
        enable_cors: Defaults to settings.CORS_ENABLED
        cors_origins: Defaults to settings.CORS_ORIGINS_LIST
        enable_docs_in_production: Defaults to settings.ENABLE_DOCS_IN_PRODUCTION
        enable_gzip: Defaults to settings.GZIP_ENABLED
        title: The title of the API, defaults to settings.APP_NAME
        summary: A short summary of the API
        description: Markdown description, defaults to settings.APP_DESCRIPTION
        version: The version of the API, defaults to settings.VERSION
        **kwargs: Additional keyword arguments passed to FastAPI constructor

    Returns:
        A configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    _create_tables_on_startup = (
        create_tables_on_startup if create_tables_on_startup is not None else settings.CREATE_TABLES_ON_STARTUP
    )
    _enable_cors = enable_cors if enable_cors is not None else settings.CORS_ENABLED
    _cors_origins = cors_origins if cors_origins is not None else settings.CORS_ORIGINS_LIST
    _enable_docs_in_production = (
        enable_docs_in_production if enable_docs_in_production is not None else settings.ENABLE_DOCS_IN_PRODUCTION
    )
    _enable_gzip = enable_gzip if enable_gzip is not None else settings.GZIP_ENABLED

    metadata: Dict[str, Any] = {
        "title": title or settings.APP_NAME,
        "description": description or settings.APP_DESCRIPTION,
        "version": version or settings.VERSION,
        "docs_url": settings.DOCS_URL,
        "redoc_url": settings.REDOC_URL,
        "openapi_url": settings.OPENAPI_URL,
    }
    if summary is not None:
        metadata["summary"] = summary

    contact = {}
    if settings.API_CONTACT_NAME:
        contact["name"] = settings.API_CONTACT_NAME
    if settings.API_CONTACT_EMAIL:
        contact["email"] = settings.API_CONTACT_EMAIL
    if contact:
        metadata["contact"] = contact

    if settings.API_LICENSE_NAME:
        metadata["license_info"] = {"name": settings.API_LICENSE_NAME}

    if settings.ENVIRONMENT == EnvironmentOption.PRODUCTION and not _enable_docs_in_production:
        metadata.update({"docs_url": None, "redoc_url": None, "openapi_url": None})

    kwargs.update(metadata)

    if lifespan is None:
        lifespan = lifespan_factory(settings, create_tables_on_startup=_create_tables_on_startup)

    application = FastAPI(lifespan=lifespan, **kwargs)

    application.include_router(router)
    register_exception_handlers(application)

    if settings.LOG_CORRELATION_ID:
        application.middleware("http")(correlation_id_middleware)

    if _enable_cors:
        application.add_middleware(
            CORSMiddleware,
            allow_origins=_cors_origins,
            allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
            allow_methods=settings.CORS_ALLOW_METHODS.split(","),
            allow_headers=settings.CORS_ALLOW_HEADERS.split(","),
        )

    if _enable_gzip:
        application.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)

    return application
