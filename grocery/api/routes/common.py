import logging
from typing import Any, Callable, Dict

from fastapi import Response

from grocery.services.reference_errors import CatalogError, StoreUnavailable
from grocery.utils.response import format_response

logger = logging.getLogger(__name__)


def handle_service_call(response: Response, fn: Callable[[], Dict[str, Any]], msg: str, failure_msg: str):
    """Run a processor call and wrap its result (or failure) in the response envelope."""
    try:
        result = fn()
    except CatalogError as exc:
        response.status_code = exc.status_code
        return format_response(success=False, msg=exc.args[0], error=exc.code)
    except StoreUnavailable as exc:
        logger.error(f"{failure_msg}: {exc}")
        response.status_code = 503
        return format_response(success=False, msg=failure_msg, error="STORE_UNAVAILABLE")
    except Exception:
        logger.exception(failure_msg)
        response.status_code = 500
        return format_response(success=False, msg=failure_msg, error="INTERNAL_ERROR")

    if not result.get("data") and "pagination" in result:
        msg = "No records found"
    return format_response(success=True, msg=msg, **result)
