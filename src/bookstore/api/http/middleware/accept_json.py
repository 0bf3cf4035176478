"""Content negotiation: this API only ever answers in JSON."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

UNSUPPORTED_MEDIA_MESSAGE = "only json is supported"


def accepts_json(accept: str | None) -> bool:
    """True when the Accept header contains the substring ``json``."""
    return bool(accept) and "json" in accept


class AcceptJSONMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Accept header does not ask for JSON with 415."""

    async def dispatch(self, request: Request, call_next):
        if not accepts_json(request.headers.get("accept")):
            request_id = getattr(request.state, "request_id", None)
            content = {"detail": UNSUPPORTED_MEDIA_MESSAGE}
            if request_id:
                content["request_id"] = request_id
            return JSONResponse(status_code=415, content=content)
        return await call_next(request)
