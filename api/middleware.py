import time
import uuid

import structlog
from fastapi import Request

from core.logging import BusinessEvents

REQUEST_ID_HEADER = "X-Request-ID"


async def log_request(request: Request, call_next):
    """Bind a request id for the request's log lines and log how it ended.

    The id is taken from X-Request-ID when the caller sends one and echoed
    back on the response.
    """
    log = structlog.get_logger(__name__)
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
    )
    log.info(
        BusinessEvents.API_REQUEST,
        client_host=request.client.host if request.client else None,
    )

    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        log.exception(BusinessEvents.API_RESPONSE, status_code=500)
        raise

    log.info(
        BusinessEvents.API_RESPONSE,
        status_code=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
