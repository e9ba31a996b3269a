"""
Structured Logging Middleware

Request/response logging with request IDs and timing. Output is either
JSON (for log aggregation) or a plain text line carrying the request ID.
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

# Context variable for request ID (task-local)
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

ACCESS_LOGGER = "landing_builder.access"
QUIET_PATHS = ("/health",)


class RequestIdFilter(logging.Filter):
    """Logging filter to add request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Emits one JSON object per record so access lines and service events can
    be shipped to a log aggregator and filtered by request ID or subdomain.
    """

    EXTRA_FIELDS = ("method", "path", "status_code", "error_code", "duration_ms", "client_ip", "subdomain")

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }

        # Traceback for logger.exception calls
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Fields passed through `extra=`
        for key in self.EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data)


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for structured request/response logging.

    Assigns each request an ID (reusing an incoming ``X-Request-ID``),
    echoes it on the response and logs one access line whose level follows
    the status code.
    """

    def __init__(self, app: ASGIApp, logger_name: str = ACCESS_LOGGER):
        super().__init__(app)
        self.logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse the caller's request ID or mint one
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        start_time = time.perf_counter()

        # Client IP, first hop when behind proxies
        client_ip = request.headers.get(
            "X-Forwarded-For", request.headers.get("X-Real-IP", request.client.host if request.client else "unknown")
        )
        if client_ip and "," in client_ip:
            client_ip = client_ip.split(",")[0].strip()

        try:
            try:
                response = await call_next(request)
            except Exception as e:
                # Unhandled error escaping the app: log it as a 500 and re-raise
                duration_ms = (time.perf_counter() - start_time) * 1000
                self._log_request(request, 500, duration_ms, client_ip, request_id, error=str(e))
                raise

            duration_ms = (time.perf_counter() - start_time) * 1000
            # Echo the request ID for client-side correlation
            response.headers["X-Request-ID"] = request_id
            self._log_request(request, response.status_code, duration_ms, client_ip, request_id)
            return response
        finally:
            # Restore the previous request ID
            request_id_var.reset(token)

    def _log_request(
        self,
        request: Request,
        status_code: int,
        duration_ms: float,
        client_ip: str,
        request_id: str,
        error: str | None = None,
    ) -> None:
        """Log the request with structured data."""
        # Skip health checks
        if request.url.path in QUIET_PATHS:
            return

        # Level follows the status class
        if status_code >= 500:
            log_level = logging.ERROR
        elif status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": client_ip,
        }
        # Public site routes carry the tenant in the path
        subdomain = request.path_params.get("subdomain")
        if subdomain:
            extra["subdomain"] = subdomain

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
        json_format: Use JSON formatter (True for production)
        log_file: Optional file path for log output
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers
    root_logger.handlers.clear()

    handler = logging.FileHandler(log_file) if log_file else logging.StreamHandler()
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"))
    # Every record gets request_id, which the text format references
    handler.addFilter(RequestIdFilter())
    root_logger.addHandler(handler)

    # Application loggers at the configured level, chatty libraries quieter
    loggers_config = {
        "landing_builder": log_level,
        ACCESS_LOGGER: log_level,
        "uvicorn": "WARNING",
        "uvicorn.access": "WARNING",
        "sqlalchemy.engine": "WARNING",
    }
    for logger_name, level in loggers_config.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))
