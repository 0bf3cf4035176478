"""Error kinds raised by book repositories."""


class BookError(Exception):
    """Base class for every error a book repository raises."""


class InvalidBookError(BookError):
    """A candidate book is missing one of its required fields."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"book missing info: {', '.join(missing)}")


class BookExistsError(BookError):
    """A book with the same ISBN is already stored."""

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"book already exists: {isbn}")


class BookNotFoundError(BookError):
    """No book is stored under the requested ISBN."""

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"book not found: {isbn}")


class StorageError(BookError):
    """The storage layer failed; the original exception is the ``__cause__``."""
