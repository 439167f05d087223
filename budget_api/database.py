from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from fastapi import Request

from budget_api.models.budget import Base
from budget_api.utils.logger import app_logger


class Database:
    """
    Connection pool handle

    Owns the async engine and its session factory. Built once at startup,
    kept on app.state and disposed on shutdown.
    """

    def __init__(self, url: str, pool_size: int = 10, max_overflow: int = 20,
                 pool_recycle: int = 3600, echo: bool = False):
        engine_options = {"pool_pre_ping": True, "echo": echo}
        # sqlite picks its own pool class
        if not url.startswith("sqlite"):
            engine_options.update(pool_size=pool_size, max_overflow=max_overflow, pool_recycle=pool_recycle)

        self.engine = create_async_engine(url, **engine_options)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        app_logger.info(f"Database engine initialized for dialect: {self.engine.dialect.name}")

    async def init_schema(self):
        """Create the budgets table if it is missing"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        app_logger.info("budgets table is ready")

    async def ping(self):
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self):
        await self.engine.dispose()
        app_logger.info("Database engine disposed")


async def get_db(request: Request):
    """Yield a database session from the application's pool"""
    database: Database = request.app.state.database
    session = database.session_factory()
    try:
        yield session
    except SQLAlchemyError as e:
        app_logger.error(f"Database operation error: {e}")
        await session.rollback()
        raise
    finally:
        try:
            await session.close()
        except Exception as e:
            app_logger.error(f"Error closing database session: {e}")
