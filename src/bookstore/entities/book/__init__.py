"""Book entity module.

This module contains all Book-related classes organized by responsibility:
- Book: Domain entity
- BookTable: Database persistence model
- BookRepository: Data access contract and its implementations
- BookError and subclasses: Error kinds of the data access layer
"""

from .entity import Book
from .errors import (
    BookError,
    BookExistsError,
    BookNotFoundError,
    InvalidBookError,
    StorageError,
)
from .repository import BookRepository, InMemoryBookRepository, SqlBookRepository
from .table import BookTable

__all__ = [
    "Book",
    "BookTable",
    "BookRepository",
    "SqlBookRepository",
    "InMemoryBookRepository",
    "BookError",
    "InvalidBookError",
    "BookExistsError",
    "BookNotFoundError",
    "StorageError",
]
