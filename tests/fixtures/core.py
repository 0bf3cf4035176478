from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlmodel import SQLModel, create_engine

from src.bookstore.core.services import DbSessionService
from src.bookstore.entities.book import (
    Book,
    BookRepository,
    InMemoryBookRepository,
    SqlBookRepository,
)

JSON_HEADERS = {"Accept": "application/json"}

__all__ = [
    "JSON_HEADERS",
    "sample_book",
    "database_service",
    "sql_repository",
    "memory_repository",
    "app_factory",
    "client",
]


@pytest.fixture
def sample_book() -> Book:
    return Book(
        isbn="978-0-13",
        title="The Go Programming Language",
        author="Donovan",
        price=39.99,
    )


@pytest.fixture
def database_service() -> Generator[DbSessionService]:
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Register the table with the metadata before creating it
    from src.bookstore.entities.book import BookTable  # noqa: F401

    SQLModel.metadata.create_all(engine)
    service = DbSessionService(engine=engine)
    try:
        yield service
    finally:
        engine.dispose()


@pytest.fixture
def sql_repository(database_service: DbSessionService) -> SqlBookRepository:
    return SqlBookRepository(database_service)


@pytest.fixture
def memory_repository() -> InMemoryBookRepository:
    return InMemoryBookRepository()


@pytest.fixture
def app_factory() -> Callable[..., FastAPI]:
    from src.bookstore.api.http.app import create_app

    def _make_app(
        repository: BookRepository, database_service: DbSessionService | None = None
    ) -> FastAPI:
        return create_app(repository=repository, database_service=database_service)

    return _make_app


@pytest.fixture
def client(
    app_factory: Callable[..., FastAPI], memory_repository: InMemoryBookRepository
) -> Generator[TestClient]:
    """Test client for an app serving the in-memory repository."""
    with TestClient(app_factory(memory_repository)) as test_client:
        yield test_client
