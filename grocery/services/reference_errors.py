from typing import Any, Dict, List, Optional


class CatalogError(Exception):
    """Request-level error for catalog operations."""
    def __init__(self, message: str, *, status_code: int = 400, code: str = "VALIDATION_FAILED", errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.errors = errors or []


class StoreUnavailable(Exception):
    """A MongoDB collection could not be queried."""
    def __init__(self, collection: str, cause: Exception):
        super().__init__(f"Collection '{collection}' is unavailable: {cause}")
        self.collection = collection
        self.cause = cause


class MalformedFieldSpec(ValueError):
    """A FieldSpec names an unknown type, attribute or nesting."""
