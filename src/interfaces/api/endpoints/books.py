"""Book API endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status

from ....modules.book.schemas import BookCreate, BookRead, BookUpdate
from ....modules.book.services import BookService
from ....modules.common.utils.error_handler import raise_http_exception, service_operation
from ..dependencies import DbSession, get_book_service, require_book_editor

router = APIRouter(prefix="/books", tags=["Books"])


@router.get(
    "",
    summary="List Books",
    description="Returns every book in the store, ordered by id.",
    responses={
        200: {"description": "List of books"},
        500: {"description": "Books could not be loaded"},
    },
)
async def get_books(
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> List[BookRead]:
    """Get all books."""
    try:
        return await book_service.get_all(db)
    except Exception as e:
        raise_http_exception(e)


@router.get(
    "/{book_id}",
    summary="Get Book",
    description="Returns a single book's record.",
    responses={
        200: {"description": "The book"},
        404: {"description": "Book not found"},
        500: {"description": "Book could not be loaded"},
    },
)
async def get_book(
    book_id: int,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> BookRead:
    """Get a book by id."""
    try:
        return await book_service.get_by_id(book_id, db)
    except Exception as e:
        raise_http_exception(e)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Book",
    description="""
    Adds a book to the catalogue.

    - **title**: Book title (required)
    - **year**, **isbn**, **summary**, **image**, **price**: Optional details
    - **author_id**: Optional id of the book's author

    The response carries the created book and a `Location` header pointing
    at it.
    """,
    responses={
        201: {"description": "Book created"},
        400: {"description": "Empty or invalid book data"},
        500: {"description": "Book could not be stored"},
    },
    dependencies=[Depends(require_book_editor)],
)
@service_operation(get_book_service, "create")
async def create_book(
    request: Request,
    response: Response,
    db: DbSession,
    book_data: Annotated[Optional[BookCreate], Body()] = None,
    book_service: BookService = Depends(get_book_service),
) -> BookRead:
    """Create a book."""
    try:
        created = await book_service.create(book_data, db)
    except Exception as e:
        raise_http_exception(e)

    response.headers["Location"] = str(request.url_for("get_book", book_id=created.id))
    return created


@router.put(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Update Book",
    description="Replaces a book's fields. The `id` in the body must equal the `book_id` in the path.",
    responses={
        204: {"description": "Book updated"},
        400: {"description": "Invalid id, missing body or mismatched ids"},
        404: {"description": "Book not found"},
        500: {"description": "Book could not be updated"},
    },
    dependencies=[Depends(require_book_editor)],
)
@service_operation(get_book_service, "update")
async def update_book(
    book_id: int,
    db: DbSession,
    book_data: Annotated[Optional[BookUpdate], Body()] = None,
    book_service: BookService = Depends(get_book_service),
) -> Response:
    """Update a book."""
    try:
        await book_service.update(book_id, book_data, db)
    except Exception as e:
        raise_http_exception(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Book",
    description="Removes a book from the catalogue.",
    responses={
        204: {"description": "Book deleted"},
        400: {"description": "Invalid id"},
        404: {"description": "Book not found"},
        500: {"description": "Book could not be deleted"},
    },
    dependencies=[Depends(require_book_editor)],
)
async def delete_book(
    book_id: int,
    db: DbSession,
    book_service: BookService = Depends(get_book_service),
) -> Response:
    """Delete a book."""
    try:
        await book_service.delete(book_id, db)
    except Exception as e:
        raise_http_exception(e)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
