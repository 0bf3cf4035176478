"""Book data access layer.

``BookRepository`` is the contract the HTTP layer depends on. Repositories
never log; they only raise the error kinds from ``errors``.
"""

import threading
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager, nullcontext

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select

from src.bookstore.core.services.database.db_session import DbSessionService

from .entity import Book
from .errors import BookExistsError, BookNotFoundError, InvalidBookError, StorageError
from .table import BookTable


class BookRepository(ABC):
    """Persistence operations for books."""

    @abstractmethod
    def list_books(self) -> list[Book]:
        """Return every stored book in storage order.

        Raises:
            StorageError: The storage layer failed
        """

    @abstractmethod
    def get_book_by_isbn(self, isbn: str) -> Book:
        """Return the book stored under ``isbn``.

        Raises:
            BookNotFoundError: No book has that ISBN
            StorageError: The storage layer failed
        """

    @abstractmethod
    def _insert(self, book: Book) -> None:
        """Store a validated book whose ISBN was just checked to be free.

        Raises:
            BookExistsError: The storage layer reports a duplicate key
            StorageError: The storage layer failed
        """

    def _creating(self) -> AbstractContextManager:
        """Guard held across the existence check and the insert."""
        return nullcontext()

    def has_book(self, isbn: str) -> bool:
        try:
            self.get_book_by_isbn(isbn)
        except BookNotFoundError:
            return False
        return True

    def create_book(self, candidate: Book) -> Book:
        """Store a new book and return it as persisted.

        The returned book is read back from storage by its ISBN. The price
        is stored as given; only isbn, title and author are required.

        Raises:
            InvalidBookError: isbn, title or author is empty
            BookExistsError: A book with the same ISBN is already stored
            StorageError: The storage layer failed
        """
        missing = candidate.missing_fields()
        if missing:
            raise InvalidBookError(missing)

        with self._creating():
            if self.has_book(candidate.isbn):
                raise BookExistsError(candidate.isbn)
            self._insert(candidate)

        return self.get_book_by_isbn(candidate.isbn)


class SqlBookRepository(BookRepository):
    """Book repository backed by the ``books`` table.

    Check-then-insert is not atomic across connections; the primary key on
    ``isbn`` rejects the losing insert, which surfaces as ``BookExistsError``.
    """

    def __init__(self, database: DbSessionService) -> None:
        self._database = database

    def list_books(self) -> list[Book]:
        try:
            with self._database.session_scope() as session:
                rows = session.exec(select(BookTable)).all()
                return [Book.model_validate(row, from_attributes=True) for row in rows]
        except SQLAlchemyError as e:
            raise StorageError("failed to list books") from e

    def get_book_by_isbn(self, isbn: str) -> Book:
        try:
            with self._database.session_scope() as session:
                row = session.get(BookTable, isbn)
                if row is None:
                    raise BookNotFoundError(isbn)
                return Book.model_validate(row, from_attributes=True)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to load book {isbn}") from e

    def _insert(self, book: Book) -> None:
        try:
            with self._database.session_scope() as session:
                session.add(BookTable.model_validate(book.model_dump()))
        except IntegrityError as e:
            # A key collision leaves the competing row readable
            if self.has_book(book.isbn):
                raise BookExistsError(book.isbn) from e
            raise StorageError(f"failed to insert book {book.isbn}") from e
        except SQLAlchemyError as e:
            raise StorageError(f"failed to insert book {book.isbn}") from e


class InMemoryBookRepository(BookRepository):
    """Dict-backed repository with the same contract, for tests and local runs."""

    def __init__(self, books: list[Book] | None = None) -> None:
        self._books: dict[str, Book] = {}
        self._lock = threading.RLock()
        for book in books or []:
            self._books[book.isbn] = book.model_copy()

    def list_books(self) -> list[Book]:
        with self._lock:
            return [book.model_copy() for book in self._books.values()]

    def get_book_by_isbn(self, isbn: str) -> Book:
        with self._lock:
            book = self._books.get(isbn)
        if book is None:
            raise BookNotFoundError(isbn)
        return book.model_copy()

    def _insert(self, book: Book) -> None:
        with self._lock:
            if book.isbn in self._books:
                raise BookExistsError(book.isbn)
            self._books[book.isbn] = book.model_copy()

    def _creating(self) -> AbstractContextManager:
        return self._lock
