"""Common constants used across the application."""

from typing import Callable, Dict, Type

from fastapi import HTTPException, status

from .exceptions import (
    AuthenticationError,
    DomainError,
    PermissionDeniedError,
    RepositoryError,
    ResourceExistsError,
    ResourceNotFoundError,
    ValidationError,
)

ADMINISTRATOR_ROLE = "Administrator"
CUSTOMER_ROLE = "Customer"

EXCEPTION_MAPPING: Dict[Type[DomainError], Callable[[str], HTTPException]] = {
    ValidationError: lambda message: HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message),
    AuthenticationError: lambda message: HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED, detail=message, headers={"WWW-Authenticate": "Bearer"}
    ),
    PermissionDeniedError: lambda message: HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message),
    ResourceNotFoundError: lambda message: HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message),
    ResourceExistsError: lambda message: HTTPException(status_code=status.HTTP_409_CONFLICT, detail=message),
    RepositoryError: lambda message: HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message),
}
