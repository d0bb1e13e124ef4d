"""
Audit logging middleware.
Records every request to the pain-plan endpoints in the application log.
Plans carry patient identifiers, so access is traced even though nothing
is persisted.
"""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger(__name__)

AUDITED_PATH_PREFIXES = (
    "/api/v1/pain-plans",
)

ACTION_MAP = {
    "GET": "view",
    "POST": "generate",
}


class AuditMiddleware(BaseHTTPMiddleware):
    """Middleware that logs access to plan endpoints."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)

        path = request.url.path
        if not any(path.startswith(prefix) for prefix in AUDITED_PATH_PREFIXES):
            return response

        # Derive resource name from path, e.g. /api/v1/pain-plans/procedural -> procedural
        parts = [p for p in path.split("/") if p]
        resource = parts[3] if len(parts) >= 4 else "plan"
        action = ACTION_MAP.get(request.method, request.method.lower())
        ip_address = request.client.host if request.client else None

        logger.info(
            "audit action=%s resource=%s method=%s path=%s status=%s ip=%s duration_ms=%.1f",
            action, resource, request.method, path, response.status_code, ip_address,
            (time.perf_counter() - started) * 1000,
        )
        return response
