"""Utility functions for mapping domain exceptions to HTTP exceptions."""

from typing import Any, Callable, NoReturn, Optional, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_MAPPING
from ..exceptions import INTERNAL_ERROR_MESSAGE, DomainError

logger = get_logger(__name__)

EndpointType = TypeVar("EndpointType", bound=Callable[..., Any])


def map_exception(error: DomainError) -> HTTPException:
    """Map a domain exception to a corresponding HTTP exception."""
    for exception_class, mapper in EXCEPTION_MAPPING.items():
        if isinstance(error, exception_class):
            return mapper(str(error))

    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Register global handlers for domain and request validation errors."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Convert domain exceptions to appropriate HTTP responses."""
        http_exception = map_exception(exc)
        return JSONResponse(
            status_code=http_exception.status_code,
            content={"detail": http_exception.detail},
            headers=http_exception.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Answer schema-invalid requests with 400 instead of FastAPI's 422.

        Routes tagged with ``service_operation`` log the rejection through
        their service, so the lines read like any other service outcome.
        """
        route = request.scope.get("route")
        operation = getattr(getattr(route, "endpoint", None), "service_operation", None)
        if operation is None:
            logger.warning(
                f"{request.method} {request.url.path}: Data was incomplete", extra={"errors": str(exc.errors())}
            )
        else:
            provider, action = operation
            service = request.app.dependency_overrides.get(provider, provider)()
            service.log_incomplete_request(action, next(iter(request.path_params.values()), None))

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )


def service_operation(provider: Callable[[], Any], action: str) -> Callable[[EndpointType], EndpointType]:
    """Tag a route endpoint with the service provider and action it runs.

    Args:
        provider: The dependency that builds the route's service
        action: The service action name used in log lines, e.g. ``"create"``
    """

    def decorator(endpoint: EndpointType) -> EndpointType:
        endpoint.service_operation = (provider, action)
        return endpoint

    return decorator


def handle_exception(error: Exception) -> Optional[HTTPException]:
    """
    Handle an exception and return an appropriate HTTP exception if possible.

    For use in route handlers when you want to handle exceptions manually.

    Args:
        error: The exception to handle

    Returns:
        An HTTPException if the error can be mapped, None otherwise
    """
    if isinstance(error, DomainError):
        return map_exception(error)
    elif isinstance(error, HTTPException):
        return error
    return None


def raise_http_exception(error: Exception) -> NoReturn:
    """Re-raise any exception caught in a route handler as an HTTPException.

    Mapped errors keep their status; anything else becomes a 500 with the
    generic message.
    """
    http_exc = handle_exception(error)
    if http_exc:
        raise http_exc
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR_MESSAGE)
