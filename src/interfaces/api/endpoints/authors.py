"""Author API endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status

from ....modules.author.schemas import AuthorCreate, AuthorRead, AuthorUpdate
from ....modules.author.services import AuthorService
from ....modules.common.utils.error_handler import raise_http_exception, service_operation
from ..dependencies import DbSession, get_author_service, require_admin

router = APIRouter(prefix="/authors", tags=["Authors"])


@router.get(
    "",
    summary="List Authors",
    description="Returns every author in the store, ordered by id.",
    responses={
        200: {"description": "List of authors"},
        500: {"description": "Authors could not be loaded"},
    },
)
async def get_authors(
    db: DbSession,
    author_service: AuthorService = Depends(get_author_service),
) -> List[AuthorRead]:
    """Get all authors."""
    try:
        return await author_service.get_all(db)
    except Exception as e:
        raise_http_exception(e)


@router.get(
    "/{author_id}",
    summary="Get Author",
    description="Returns a single author's record.",
    responses={
        200: {"description": "The author"},
        404: {"description": "Author not found"},
        500: {"description": "Author could not be loaded"},
    },
)
async def get_author(
    author_id: int,
    db: DbSession,
    author_service: AuthorService = Depends(get_author_service),
) -> AuthorRead:
    """Get an author by id."""
    try:
        return await author_service.get_by_id(author_id, db)
    except Exception as e:
        raise_http_exception(e)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Author",
    description="""
    Creates a new author. Requires the **Administrator** role.

    - **first_name**: Author's first name
    - **last_name**: Author's last name
    - **bio**: Optional short biography

    The response carries the created author and a `Location` header
    pointing at it.
    """,
    responses={
        201: {"description": "Author created"},
        400: {"description": "Empty or invalid author data"},
        401: {"description": "Missing or invalid bearer token"},
        403: {"description": "Caller is not an administrator"},
        500: {"description": "Author could not be stored"},
    },
    dependencies=[Depends(require_admin)],
)
@service_operation(get_author_service, "create")
async def create_author(
    request: Request,
    response: Response,
    db: DbSession,
    author_data: Annotated[Optional[AuthorCreate], Body()] = None,
    author_service: AuthorService = Depends(get_author_service),
) -> AuthorRead:
    """Create an author."""
    try:
        created = await author_service.create(author_data, db)
    except Exception as e:
        raise_http_exception(e)

    response.headers["Location"] = str(request.url_for("get_author", author_id=created.id))
    return created


@router.put(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update Author",
    description="""
    Replaces an author's fields. Requires the **Administrator** role.

    The `id` in the body must equal the `author_id` in the path.
    """,
    responses={
        204: {"description": "Author updated"},
        400: {"description": "Invalid id, missing body or mismatched ids"},
        401: {"description": "Missing or invalid bearer token"},
        403: {"description": "Caller is not an administrator"},
        404: {"description": "Author not found"},
        500: {"description": "Author could not be updated"},
    },
    dependencies=[Depends(require_admin)],
)
@service_operation(get_author_service, "update")
async def update_author(
    author_id: int,
    db: DbSession,
    author_data: Annotated[Optional[AuthorUpdate], Body()] = None,
    author_service: AuthorService = Depends(get_author_service),
) -> Response:
    """Update an author."""
    try:
        await author_service.update(author_id, author_data, db)
    except Exception as e:
        raise_http_exception(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{author_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Author",
    description="Removes an author. Requires the **Administrator** role. Books keep existing without an author.",
    responses={
        204: {"description": "Author deleted"},
        400: {"description": "Invalid id"},
        401: {"description": "Missing or invalid bearer token"},
        403: {"description": "Caller is not an administrator"},
        404: {"description": "Author not found"},
        500: {"description": "Author could not be deleted"},
    },
    dependencies=[Depends(require_admin)],
)
async def delete_author(
    author_id: int,
    db: DbSession,
    author_service: AuthorService = Depends(get_author_service),
) -> Response:
    """Delete an author."""
    try:
        await author_service.delete(author_id, db)
    except Exception as e:
        raise_http_exception(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
