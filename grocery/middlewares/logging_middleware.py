import logging
import time
from fastapi import Request

logger = logging.getLogger("grocery.requests")

async def log_requests(request: Request, call_next):
    # Record start time
    start_time = time.time()

    logger.info(f"Starting request: {request.method} {request.url.path}")

    try:
        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"Request completed: {request.method} {request.url.path} "
            f"status={response.status_code} time={process_time:.3f}s"
        )

        # Add processing time header to response
        response.headers["X-Process-Time"] = str(process_time)

        return response
    except Exception as exc:
        process_time = time.time() - start_time
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"time={process_time:.3f}s error={exc}"
        )
        raise
