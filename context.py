import logging
from contextvars import ContextVar
from typing import Optional

from starlette.requests import Request
from starlette.types import ASGIApp, Receive, Scope, Send

request_context: ContextVar[Optional[Request]] = ContextVar("request_context", default=None)


class RequestContextMiddleware:
    """Expose the in-flight request through `request_context` for the duration of the call"""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        token = request_context.set(Request(scope, receive))
        try:
            await self.app(scope, receive, send)
        finally:
            request_context.reset(token)


class RequestContextFilter(logging.Filter):
    """Stamp the method and path of the current request onto every log record"""

    def filter(self, record: logging.LogRecord) -> bool:
        request = request_context.get()
        record.method = request.method if request else "-"
        record.path = request.url.path if request else "-"
        return True
