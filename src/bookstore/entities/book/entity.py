"""Book domain entity."""

from pydantic import BaseModel, Field


class Book(BaseModel):
    """A book record, identified by its ISBN.

    Fields are strictly typed: a string price or a numeric title is rejected
    rather than coerced. Absent fields decode to empty values and the
    repository decides whether a book may be stored.
    """

    isbn: str = Field(default="", strict=True, description="ISBN, the natural key")
    title: str = Field(default="", strict=True, description="Book title")
    author: str = Field(default="", strict=True, description="Book author")
    price: float = Field(
        default=0.0,
        strict=True,
        allow_inf_nan=False,
        description="Book price, any finite number",
    )

    def missing_fields(self) -> list[str]:
        """Names of the required text fields that are empty."""
        return [
            name
            for name in ("isbn", "title", "author")
            if not getattr(self, name).strip()
        ]

    def __str__(self) -> str:
        return (
            f"Book(isbn={self.isbn}, title={self.title}, "
            f"author={self.author}, price=${self.price:.2f})"
        )
