"""FastAPI application factory and setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from src.bookstore import __version__
from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.api.http.errors import register_exception_handlers
from src.bookstore.api.http.middleware.accept_json import AcceptJSONMiddleware
from src.bookstore.api.http.middleware.request_logging import log_requests
from src.bookstore.api.http.routers.book import router as book_router
from src.bookstore.api.http.routers.health import router as health_router
from src.bookstore.api.utils.app_startup import configure_logging
from src.bookstore.core.services import DbSessionService
from src.bookstore.entities.book import BookRepository, SqlBookRepository
from src.bookstore.runtime.config.config_data import ConfigData
from src.bookstore.runtime.context import get_config

__all__ = ["app", "create_app", "startup", "shutdown"]


# --- Lifecycle hooks ---
def startup(config: ConfigData | None = None) -> ApplicationDependencies:
    """Build the SQL-backed repository and its engine."""
    config = config or get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config.database)
    if not database_service.health_check():
        # Requests will fail with 500 until the database comes back
        logger.warning("Database is not reachable at startup")
    elif config.database.create_tables:
        database_service.create_all()

    return ApplicationDependencies(
        book_repository=SqlBookRepository(database_service),
        database_service=database_service,
    )


def shutdown(deps: ApplicationDependencies) -> None:
    logger.info("Shutting down application")
    if deps.database_service is not None:
        deps.database_service.dispose()


def create_app(
    repository: BookRepository | None = None,
    database_service: DbSessionService | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        repository: Repository to serve; when omitted, one backed by the
            configured database is built at startup and torn down at shutdown.
        database_service: Engine owner reported by the readiness probe when
            ``repository`` is injected. The caller keeps ownership of both.
    """
    configure_logging()
    config = get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_dependencies = not hasattr(app.state, "app_dependencies")
        if owns_dependencies:
            app.state.app_dependencies = startup(config)
        try:
            yield
        finally:
            if owns_dependencies:
                shutdown(app.state.app_dependencies)
                del app.state.app_dependencies

    app = FastAPI(
        title="Bookstore API",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    app.state.config = config

    if repository is not None:
        app.state.app_dependencies = ApplicationDependencies(
            book_repository=repository,
            database_service=database_service,
        )

    # Added last runs first: requests are logged before content negotiation
    app.add_middleware(AcceptJSONMiddleware)
    app.middleware("http")(log_requests)

    register_exception_handlers(app)

    app.include_router(book_router)
    app.include_router(health_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,  # We handle access logging in middleware
    )
