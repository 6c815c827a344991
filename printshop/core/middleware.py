"""
Application middleware for request/response processing
Handles CORS, request IDs and access logging
"""

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
import hashlib
import time
import uuid
import logging
from typing import Callable, Optional

from .config import settings
from .monitoring import endpoint_label

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

def session_tag(session_id: Optional[str]) -> str:
    """Short digest of a cart session token for log lines, "-" when absent"""
    if not session_id or not session_id.strip():
        return "-"
    # Logs never carry the raw token
    return hashlib.sha256(session_id.encode("utf-8")).hexdigest()[:8]

class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID, reusing one supplied by a proxy"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        return response

class AccessLogMiddleware(BaseHTTPMiddleware):
    """One log line per request, grouped by route template and cart session"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        session = session_tag(request.headers.get(settings.SESSION_HEADER))
        request_id = getattr(request.state, "request_id", "-")

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                f"{request.method} {request.url.path} failed "
                f"session={session} request_id={request_id}"
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {endpoint_label(request)} -> {response.status_code} "
            f"session={session} request_id={request_id} {process_time * 1000:.1f}ms"
        )
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        return response

def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
        expose_headers=[REQUEST_ID_HEADER, "X-Process-Time"],
    )

    # Last added runs first, so the request ID exists before logging
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)
