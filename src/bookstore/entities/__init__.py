"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model with validation
- table.py: Database persistence model
- repository.py: Data access layer
- errors.py: Error kinds raised by the data access layer
"""

from .book import (
    Book,
    BookError,
    BookExistsError,
    BookNotFoundError,
    BookRepository,
    BookTable,
    InMemoryBookRepository,
    InvalidBookError,
    SqlBookRepository,
    StorageError,
)

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
