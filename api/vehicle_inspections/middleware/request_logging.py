from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


def register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        started = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            status_code = response.status_code if response is not None else 500
            elapsed_ms = (time.perf_counter() - started) * 1000
            try:
                route = request.scope.get("route")
                logger.info(
                    "%s %s -> %s (%.1f ms)",
                    request.method,
                    getattr(route, "path", None) or request.url.path,
                    status_code,
                    elapsed_ms,
                )
            except Exception as exc:  # pragma: no cover
                logger.warning("request logging failed: %s", exc)
