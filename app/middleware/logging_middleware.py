"""
Request/response logging middleware.
"""

import time
import uuid
from fastapi import Request
from app.utils.logger import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

async def log_requests(request: Request, call_next):
    """Log each request with its status, duration and request id."""
    start_time = time.time()
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

    logger.info(f"[{request_id}] Request: {request.method} {request.url.path}")

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(f"[{request_id}] Response: {response.status_code} - {process_time:.3f}s")

    return response
