from typing import Any, Dict, Optional
from bson import ObjectId

def format_response(
    success: bool = True,
    msg: str = "Operation completed successfully",
    data: Any = None,
    pagination: Optional[Dict[str, Any]] = None,
    error: Optional[str] = None,
    **extra: Any
) -> Dict[str, Any]:
    """
    Format API response in a consistent structure.

    Args:
        success (bool): Whether the operation was successful
        msg (str): Message describing the operation result
        data (Any): Payload; ObjectIds anywhere inside are converted to strings
        pagination (Optional[Dict[str, Any]]): Pagination block for list endpoints
        error (Optional[str]): Machine-readable error code for failures
        **extra: Additional top-level keys (count, filters, ...)

    Returns:
        Dict[str, Any]: Formatted response dictionary
    """
    response = {
        "success": success,
        "message": msg,
    }

    if data is not None:
        response["data"] = convert_objectid_to_str(data)
    if pagination is not None:
        response["pagination"] = pagination
    if error is not None:
        response["error"] = error
    for key, value in extra.items():
        response[key] = convert_objectid_to_str(value)

    return response

def convert_objectid_to_str(data):
    if isinstance(data, dict):
        return {k: convert_objectid_to_str(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [convert_objectid_to_str(i) for i in data]
    elif isinstance(data, ObjectId):
        return str(data)
    else:
        return data
