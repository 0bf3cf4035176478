from dataclasses import dataclass

from src.bookstore.core.services import DbSessionService
from src.bookstore.entities.book import BookRepository


@dataclass
class ApplicationDependencies:
    book_repository: BookRepository
    database_service: DbSessionService | None = None
