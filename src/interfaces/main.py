from ..infrastructure.app_factory import create_application
from ..infrastructure.config.settings import get_settings
from ..infrastructure.logging import configure_logging
from ..interfaces.api import router as api_router

configure_logging()

settings = get_settings()

app = create_application(
    router=api_router,
    settings=settings,
    title=settings.APP_NAME,
    summary="REST API for the bookstore's authors and books",
    description="""
    # Bookstore API

    Manage the catalogue of a bookstore:

    * **Authors**: list, look up, create, update and delete authors
    * **Books**: list, look up, create, update and delete books
    * **Users**: register an account and log in for a bearer token

    Changing authors requires the Administrator role.
    """,
    version=settings.VERSION,
)
