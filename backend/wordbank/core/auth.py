from __future__ import annotations

import hmac
import logging
from typing import Awaitable, Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from ..config import settings
from .errors import Unauthorized

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


def is_authorized(provided: Optional[str], expected: Optional[str]) -> bool:
    """No configured key means nobody gets in."""
    if not expected or not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def api_key_gate(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """
    HTTP middleware run before routing, so a rejected request never reaches a
    handler or the database.
    """
    if request.url.path in settings.public_paths:
        return await call_next(request)

    if not is_authorized(request.headers.get(API_KEY_HEADER), settings.x_api_key):
        logger.debug("rejected %s %s: bad or missing api key", request.method, request.url.path)
        err = Unauthorized()
        return JSONResponse(status_code=err.status_code, content=err.to_payload())

    return await call_next(request)
