"""
Structured Logging Middleware

One access log line per request, plus a JSON formatter that stamps every
log record (overlay engine and repository included) with the request id
and the locale the request is being served in.
"""

import json
import logging
import time
import uuid
from collections.abc import Callable
from contextvars import ContextVar
from datetime import datetime, timezone

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.i18n.context import locale_context_var

ACCESS_LOGGER = "translate.access"

# Paths left out of the access log
QUIET_PATHS = frozenset({"/health"})

# Record attributes copied into the JSON document when present
EXTRA_KEYS = ("method", "path", "status_code", "duration_ms", "client_ip", "contenttype")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_request_id() -> str:
    """Get the current request ID from context."""
    return request_id_var.get("")


def get_request_locale() -> str:
    """Slug of the locale bound to the current request, or "" outside one."""
    context = locale_context_var.get()
    return context.current().slug if context is not None else ""


class RequestContextFilter(logging.Filter):
    """Attach request id and active locale to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        if not getattr(record, "locale", None):
            record.locale = get_request_locale()
        return True


class StructuredFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
            "locale": getattr(record, "locale", ""),
        }
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.headers.get("X-Real-IP") or (request.client.host if request.client else "unknown")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request/response access logging.

    Sets the ``X-Request-ID`` response header (taken from the request when
    the client sent one) and logs method, path, status, timing and locale.
    """

    def __init__(self, app: ASGIApp, logger_name: str = ACCESS_LOGGER):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            self._log_request(request, 500, start_time, error=str(e))
            request_id_var.reset(token)
            raise

        response.headers["X-Request-ID"] = request_id
        self._log_request(request, response.status_code, start_time)
        request_id_var.reset(token)
        return response

    def _log_request(
        self,
        request: Request,
        status_code: int,
        start_time: float,
        error: str | None = None,
    ) -> None:
        if request.url.path in QUIET_PATHS:
            return

        duration_ms = (time.perf_counter() - start_time) * 1000
        if status_code >= 500:
            log_level = logging.ERROR
        elif status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": _client_ip(request),
        }
        # locale_context_var is already reset here; read the request state instead
        locale_context = getattr(request.state, "locale_context", None)
        if locale_context is not None:
            extra["locale"] = locale_context.current().slug

        message = f"{request.method} {request.url.path} - {status_code} ({duration_ms:.2f}ms)"
        if error:
            message += f" - Error: {error}"

        self.logger.log(log_level, message, extra=extra)


def setup_structured_logging(
    log_level: str = "INFO",
    json_format: bool = True,
    log_file: str | None = None,
) -> None:
    """
    Configure root logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Use the JSON formatter (plain text otherwise)
        log_file: Optional file path for log output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.handlers.clear()

    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s %(locale)s] %(message)s")
        )
    handler.addFilter(RequestContextFilter())
    root_logger.addHandler(handler)

    loggers_config = {
        "app": log_level,
        ACCESS_LOGGER: log_level,
        "uvicorn.access": "WARNING",
        "sqlalchemy.engine": "WARNING",
    }
    for logger_name, level in loggers_config.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))
