import logging
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo.errors import PyMongoError

from grocery.services.reference_errors import StoreUnavailable
from grocery.services.reference_types import ReferenceType

logger = logging.getLogger(__name__)


def run_query(collection_name: str, query_fn):
    """Run a pymongo call, translating driver failures into StoreUnavailable."""
    try:
        return query_fn()
    except PyMongoError as exc:
        logger.error(f"Query on '{collection_name}' failed: {exc}")
        raise StoreUnavailable(collection_name, exc) from exc


class ReferenceStore:
    """Read-only access to the department, category and subcategory collections."""

    def __init__(self, database):
        self.database = database

    def find_by_key(self, ref_type: ReferenceType, key: ObjectId) -> Optional[Dict[str, Any]]:
        docs = self.find_by_keys(ref_type, [key])
        return docs[0] if docs else None

    def find_by_legacy_code(self, ref_type: ReferenceType, code: str) -> Optional[Dict[str, Any]]:
        docs = self.find_by_legacy_codes(ref_type, [code])
        return docs[0] if docs else None

    def find_by_keys(self, ref_type: ReferenceType, keys: Iterable[ObjectId]) -> List[Dict[str, Any]]:
        keys = list(keys)
        if not keys:
            return []
        return self._find(ref_type, {"_id": {"$in": keys}})

    def find_by_legacy_codes(self, ref_type: ReferenceType, codes: Iterable[str]) -> List[Dict[str, Any]]:
        codes = list(codes)
        if not codes:
            return []
        return self._find(ref_type, {ref_type.legacy_field: {"$in": codes}})

    def _find(self, ref_type: ReferenceType, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        # Ascending _id makes "first match" on duplicated legacy codes deterministic
        collection = self.database[ref_type.collection]
        return run_query(ref_type.collection, lambda: list(collection.find(query).sort("_id", 1)))
