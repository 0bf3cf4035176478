"""Book database table model."""

from sqlmodel import Field, SQLModel


class BookTable(SQLModel, table=True):
    """Database persistence model for books.

    The primary key on ``isbn`` is what keeps two concurrent creates of the
    same book from both landing.
    """

    __tablename__ = "books"

    isbn: str = Field(primary_key=True, max_length=64)
    title: str = Field(nullable=False)
    author: str = Field(nullable=False)
    price: float = Field(nullable=False)
