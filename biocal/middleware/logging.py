"""Structured logging setup shared by the API and the council CLI."""

from __future__ import annotations

import logging
import sys
import time
import uuid
from typing import Any, TextIO

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from biocal.config import LogFormat, get_settings

REQUEST_ID_HEADER = "x-request-id"
QUIET_PATHS = frozenset({"/health"})

_configured = False


def configure_structured_logging(stream: TextIO | None = None, *, force: bool = False) -> None:
	"""Route stdlib logging and structlog to ``stream`` (stderr by default).

	Runs once per process unless ``force`` is set; the CLI keeps stdout free
	for rendered council output, so logs never go there.
	"""
	global _configured
	if _configured and not force:
		return

	settings = get_settings()
	level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
	stream = stream or sys.stderr

	if settings.log_format == LogFormat.json:
		renderer: Any = structlog.processors.JSONRenderer(sort_keys=True)
		logging.basicConfig(level=level, format="%(message)s", stream=stream, force=force)
	else:
		renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())
		logging.basicConfig(level=level, stream=stream, force=force)

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			structlog.processors.format_exc_info,
			renderer,
		],
		wrapper_class=structlog.make_filtering_bound_logger(level),
		logger_factory=structlog.PrintLoggerFactory(file=stream),
		cache_logger_on_first_use=True,
	)
	_configured = True


def _level_for_status(status_code: int) -> str:
	if status_code >= 500:
		return "error"
	if status_code >= 400:
		return "warning"
	return "info"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Tag each request with an ID and log its outcome and latency."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
		request.state.request_id = request_id

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(
			request_id=request_id,
			method=request.method,
			path=request.url.path,
		)
		logger = structlog.get_logger("biocal.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception:
			logger.exception("http_request_failed", duration_ms=_elapsed_ms(start))
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		if request.url.path not in QUIET_PATHS:
			log = getattr(logger, _level_for_status(response.status_code))
			log("http_request", status_code=response.status_code, duration_ms=_elapsed_ms(start))
		return response


def _elapsed_ms(start: float) -> float:
	return round((time.perf_counter() - start) * 1000.0, 2)
