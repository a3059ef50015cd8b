"""Request id middleware."""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.utils.request_context import request_id_var


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id for log correlation.

    An incoming ``X-Request-ID`` header is reused, otherwise a UUID is
    generated. The id is visible to log records through the request context
    and echoed back on the response.
    """

    HEADER = "X-Request-ID"

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.HEADER) or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[self.HEADER] = request_id
        return response
