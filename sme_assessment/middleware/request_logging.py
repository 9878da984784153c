"""
Request Logging Middleware

ASGI middleware that tags every HTTP request with a request id, exposes it as
the ``X-Request-ID`` response header and logs method, path, status and
duration.
"""

import logging
import time
import uuid

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = b"x-request-id"
SLOW_REQUEST_MS = 2000


class RequestLoggingMiddleware:
    """Middleware to log HTTP requests with a correlation id"""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = self._incoming_request_id(scope) or uuid.uuid4().hex[:12]
        scope.setdefault("state", {})["request_id"] = request_id

        start_time = time.time()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(f"[{request_id}] Request processing error: {e}")
            raise
        finally:
            response_time_ms = (time.time() - start_time) * 1000
            self._log_request(scope, request_id, status_code, response_time_ms)

    def _incoming_request_id(self, scope) -> str:
        for name, value in scope.get("headers", []):
            if name == REQUEST_ID_HEADER:
                return value.decode("latin-1")[:64]
        return ""

    def _log_request(self, scope, request_id: str, status_code: int, response_time_ms: float):
        method = scope.get("method", "-")
        path = scope.get("path", "-")
        message = f"[{request_id}] {method} {path} -> {status_code} in {response_time_ms:.0f}ms"

        if response_time_ms > SLOW_REQUEST_MS:
            logger.warning(f"Slow request: {message}")
        elif status_code >= 500:
            logger.error(message)
        elif status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)
