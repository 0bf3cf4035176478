"""Book API router."""

from fastapi import APIRouter, Depends, status

from src.bookstore.api.http.deps import get_book_repository
from src.bookstore.entities.book import Book, BookRepository

router = APIRouter(prefix="/book", tags=["books"])


@router.get("", response_model=list[Book])
def list_books(
    repository: BookRepository = Depends(get_book_repository),
) -> list[Book]:
    """List all books."""
    return repository.list_books()


@router.get("/{isbn}", response_model=Book)
def get_book(
    isbn: str,
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Get a book by its ISBN."""
    return repository.get_book_by_isbn(isbn)


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    book: Book,
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Create a new book and return it as stored."""
    return repository.create_book(book)
