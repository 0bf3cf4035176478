"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import StaticPool, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from src.bookstore.runtime.config.config_data import DatabaseConfig
from src.bookstore.runtime.context import get_config


class DbSessionService:
    """Owns the engine (and its connection pool) for the process lifetime."""

    def __init__(self, db_config: DatabaseConfig | None = None, engine: Engine | None = None):
        """Build the shared engine from configuration, or adopt a prebuilt one."""
        self._config = db_config or get_config().database
        if engine is not None:
            self._engine = engine
            return

        logger.info("Setting up database engine for {}", self._config.dialect)
        self._engine = create_engine(
            self._config.connection_string, **self._engine_kwargs()
        )

        if self._config.environment_mode == "production":
            logger.info(
                "Database engine initialized",
                pool_size=self._config.pool_size,
                max_overflow=self._config.max_overflow,
                pool_timeout=self._config.pool_timeout,
                pool_recycle=self._config.pool_recycle,
            )

    @property
    def engine(self) -> Engine:
        return self._engine

    def _engine_kwargs(self) -> dict[str, Any]:
        cfg = self._config
        kwargs: dict[str, Any] = {
            "echo": cfg.echo,
            "pool_pre_ping": True,  # Validate connections before use
            "connect_args": self._get_connect_args(),
        }

        if cfg.dialect == "sqlite" and make_url(cfg.url).database in (None, "", ":memory:"):
            # A private in-memory database only exists on its one connection
            kwargs["poolclass"] = StaticPool
            return kwargs

        kwargs.update(
            {
                "pool_size": cfg.pool_size,
                "max_overflow": cfg.max_overflow,
                "pool_timeout": cfg.pool_timeout,
                "pool_recycle": cfg.pool_recycle,
            }
        )
        return kwargs

    def _get_connect_args(self) -> dict[str, Any]:
        """Driver arguments bounding how long a single statement may take."""
        cfg = self._config
        timeout_ms = cfg.statement_timeout_ms
        connect_args: dict[str, Any] = {}

        if cfg.dialect == "postgresql":
            connect_args.update(
                {
                    "application_name": f"{cfg.environment_mode}_bookstore",
                    "connect_timeout": max(1, timeout_ms // 1000),
                    "options": f"-c statement_timeout={timeout_ms}",
                }
            )
        elif cfg.dialect == "mysql":
            connect_args.update(
                {
                    "connect_timeout": max(1, timeout_ms // 1000),
                    "read_timeout": max(1, timeout_ms // 1000),
                }
            )
        elif cfg.dialect == "sqlite":
            connect_args.update(
                {
                    "check_same_thread": False,  # Handlers run in a thread pool
                    "timeout": timeout_ms / 1000,  # Lock timeout
                }
            )
            if cfg.environment_mode == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )

        return connect_args

    def create_all(self) -> None:
        """Create all registered tables that do not exist yet."""
        from src.bookstore.entities.book import BookTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(self._engine, expire_on_commit=False, autoflush=True)

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Transactional scope: commit on success, roll back on error."""
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(
                "Database health check failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

    def get_pool_status(self) -> dict:
        """Get current connection pool status for monitoring."""
        pool = self._engine.pool
        return {
            "size": getattr(pool, "size", lambda: 0)(),
            "checked_in": getattr(pool, "checkedin", lambda: 0)(),
            "checked_out": getattr(pool, "checkedout", lambda: 0)(),
            "overflow": getattr(pool, "overflow", lambda: 0)(),
        }

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
        logger.info("Database engine disposed")
