from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from budget_api.config import APP_NAME, APP_VERSION, get_env_config, get_database_url, get_server_config
from budget_api.database import Database
from budget_api.routes import budget, sync
from budget_api.utils.logger import app_logger


def create_app(database_url: str = None, env_config: dict = None) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        database_url: overrides DATABASE_URL and the config file
        env_config: an already selected environment section of the config

    Returns:
        FastAPI: the application, its pool is opened by the lifespan
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_logger.info("Starting application lifespan")
        config = env_config if env_config is not None else get_env_config()
        pool = config.get('pool') or {}
        database = Database(
            database_url or get_database_url(config),
            pool_size=pool.get('size', 10),
            max_overflow=pool.get('max_overflow', 20),
            pool_recycle=pool.get('recycle', 3600),
            echo=(config.get('database') or {}).get('echo', False),
        )

        # no traffic without the table
        try:
            await database.init_schema()
        except Exception as e:
            app_logger.error(f"Failed to initialize database: {e}", exc_info=True)
            await database.dispose()
            raise

        app.state.database = database

        yield

        app_logger.info("Shutting down application")
        await database.dispose()

    app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(budget.router, prefix="/budgets")
    app.include_router(sync.router)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail},
                            headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        app_logger.warning(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"error": message})

    @app.get("/health")
    async def health_check(request: Request):
        """Health check, pings the database through the pool"""
        try:
            await request.app.state.database.ping()
            return {
                "status": "healthy",
                "database": "up",
                "timestamp": datetime.now().isoformat()
            }
        except Exception as e:
            app_logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={
                    "status": "unhealthy",
                    "error": str(e),
                    "timestamp": datetime.now().isoformat()
                }
            )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    server = get_server_config(get_env_config())
    uvicorn.run(app, host=server["host"], port=server["port"], log_level="info")
