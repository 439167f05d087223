"""
Create the budgets table and exit

    python -m budget_api.migrate
"""
import asyncio
import sys

from budget_api.config import get_env_config, get_database_url
from budget_api.database import Database
from budget_api.utils.logger import app_logger


async def migrate(database_url: str = None):
    database = Database(database_url or get_database_url(get_env_config()))
    try:
        await database.init_schema()
    finally:
        await database.dispose()


def main() -> int:
    try:
        asyncio.run(migrate())
    except Exception as e:
        app_logger.error(f"Failed to initialize database: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
