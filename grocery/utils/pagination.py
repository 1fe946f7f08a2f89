from typing import Any, Dict, Iterable, List, Tuple

from config import settings
from grocery.services.reference_errors import CatalogError


def _positive_int(request_data: Dict[str, Any], key: str, default: int) -> int:
    value = request_data.get(key, default)
    if value in (None, ""):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise CatalogError(f"{key} must be an integer") from None
    if number < 1:
        raise CatalogError(f"{key} must be greater than 0")
    return number


def get_page_params(request_data: Dict[str, Any], default_limit: int = None) -> Tuple[int, int, int]:
    """Return (page, limit, skip) from a request body."""
    page = _positive_int(request_data, "page", 1)
    limit = _positive_int(request_data, "limit", default_limit or settings.DEFAULT_PAGE_LIMIT)
    limit = min(limit, settings.MAX_PAGE_LIMIT)
    return page, limit, (page - 1) * limit


def build_pagination(page: int, limit: int, total_count: int) -> Dict[str, Any]:
    total_pages = (total_count + limit - 1) // limit  # Ceiling division
    return {
        "current_page": page,
        "total_pages": total_pages,
        "total_count": total_count,
        "limit": limit,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def get_sort(request_data: Dict[str, Any], allowed: Iterable[str], default_field: str, default_order: str = "asc") -> List[Tuple[str, int]]:
    """Return a pymongo sort list; unknown fields are rejected."""
    sort_by = request_data.get("sort_by") or default_field
    sort_order = str(request_data.get("sort_order") or default_order).lower()
    if sort_by not in allowed:
        raise CatalogError(f"Cannot sort by '{sort_by}'")
    if sort_order not in ("asc", "desc"):
        raise CatalogError("sort_order must be 'asc' or 'desc'")
    return [(sort_by, -1 if sort_order == "desc" else 1)]
