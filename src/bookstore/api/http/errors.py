"""Translation of repository error kinds into HTTP responses.

Only the HTTP layer logs; repository errors arrive here unlogged.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.responses import JSONResponse

from src.bookstore.entities.book import (
    BookError,
    BookExistsError,
    BookNotFoundError,
    InvalidBookError,
)

MALFORMED_BODY_MESSAGE = "malformed request body"
SERVER_ERROR_MESSAGE = "Internal Server Error"


def describe_error(exc: BookError) -> tuple[int, str]:
    """Status code and client-facing message for a repository error."""
    if isinstance(exc, BookNotFoundError):
        return 404, f"book not found by isbn {exc.isbn}"
    if isinstance(exc, BookExistsError):
        return 400, "book already exists"
    if isinstance(exc, InvalidBookError):
        return 400, "book missing info"
    # StorageError and anything unforeseen stay opaque to the client
    return 500, SERVER_ERROR_MESSAGE


def _error_response(request: Request, status_code: int, detail) -> JSONResponse:
    request_id = getattr(request.state, "request_id", None)
    content = {"detail": detail}
    if request_id:
        content["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=content)


async def handle_book_error(request: Request, exc: BookError) -> JSONResponse:
    status_code, detail = describe_error(exc)
    if status_code >= 500:
        logger.opt(exception=exc).bind(
            status_code=status_code, error_type=type(exc).__name__
        ).error("internal server error: {}", exc)
    else:
        logger.bind(status_code=status_code, error_type=type(exc).__name__).info(
            "bad request: {}", exc
        )
    return _error_response(request, status_code, detail)


async def handle_malformed_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.bind(status_code=400, errors=exc.errors()).info("bad request: malformed body")
    return _error_response(request, 400, MALFORMED_BODY_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookError, handle_book_error)
    app.add_exception_handler(RequestValidationError, handle_malformed_body)
