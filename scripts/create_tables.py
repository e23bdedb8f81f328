"""Script to create the database tables and seed the administrator account."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.infrastructure.app_factory import seed_admin_user  # noqa: E402
from src.infrastructure.config.settings import get_settings  # noqa: E402
from src.infrastructure.database.session import create_tables  # noqa: E402
from src.infrastructure.logging import configure_logging, get_logger  # noqa: E402
from src.modules.author import models as author_models  # noqa: E402,F401
from src.modules.book import models as book_models  # noqa: E402,F401
from src.modules.user import models as user_models  # noqa: E402,F401

logger = get_logger(__name__)


async def main() -> None:
    """Create database tables and the configured administrator."""
    configure_logging()
    logger.info("Creating database tables...")

    try:
        await create_tables()
        await seed_admin_user(get_settings())
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating database tables: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
