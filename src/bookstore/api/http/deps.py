"""FastAPI dependencies resolving application-wide services."""

from fastapi import Request

from src.bookstore.api.http.app_data import ApplicationDependencies
from src.bookstore.entities.book import BookRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_book_repository(request: Request) -> BookRepository:
    return get_app_dependencies(request).book_repository
