from __future__ import annotations

import logging
import re
import time
from secrets import token_urlsafe

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hotelsite.logging_context import set_request_id

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

logger = logging.getLogger(__name__)


def resolve_request_id(raw_value: str | None) -> str:
    if raw_value and _REQUEST_ID_PATTERN.fullmatch(raw_value):
        return raw_value
    return token_urlsafe(12)


def parse_skip_paths(raw_value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw_value.split(",") if part.strip())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        *,
        log_requests: bool = True,
        skip_paths: tuple[str, ...] = (),
    ) -> None:
        super().__init__(app)
        self._log_requests = log_requests
        self._skip_paths = skip_paths

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_id(request_id)

        path = request.url.path
        should_log = self._log_requests and not path.startswith(self._skip_paths)
        started = time.perf_counter()
        if should_log:
            logger.info(
                "request.started",
                extra={"event": "request.started", "method": request.method, "path": path},
            )

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.failed",
                extra={
                    "event": "request.failed",
                    "method": request.method,
                    "path": path,
                    "duration_ms": _elapsed_ms(started),
                },
            )
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            if should_log:
                logger.info(
                    "request.completed",
                    extra={
                        "event": "request.completed",
                        "method": request.method,
                        "path": path,
                        "status_code": response.status_code,
                        "duration_ms": _elapsed_ms(started),
                    },
                )
            return response
        finally:
            set_request_id(None)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
