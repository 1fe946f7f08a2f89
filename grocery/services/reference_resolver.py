"""
Identifier resolution for department, category and subcategory references.

Reference fields across the catalog hold either a MongoDB ObjectId (or its
24-character hex string) or a legacy code carried over from the previous
system. Each raw value is classified exactly once:

    NativeKey   - looked up by ``_id`` only
    LegacyCode  - looked up by the type's legacy-code field only

A well-formed key that does not exist is never retried as a legacy code.
"""

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, NamedTuple, Optional, Union

from bson import ObjectId

from grocery.services.reference_store import ReferenceStore
from grocery.services.reference_types import ReferenceType, get_reference_type

logger = logging.getLogger(__name__)

NATIVE_KEY_PATTERN = re.compile(r"[0-9a-fA-F]{24}")


class NativeKey(NamedTuple):
    key: ObjectId


class LegacyCode(NamedTuple):
    code: str


Identifier = Union[NativeKey, LegacyCode]


@dataclass(frozen=True)
class Resolved:
    key: ObjectId
    entity: Dict[str, Any] = field(hash=False)


@dataclass(frozen=True)
class Unresolved:
    raw: Any


class _Absent:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ABSENT"

    def __bool__(self):
        return False


ABSENT = _Absent()

Resolution = Union[Resolved, Unresolved, _Absent]


def is_native_key(text: str) -> bool:
    return bool(NATIVE_KEY_PATTERN.fullmatch(text))


def classify_identifier(raw: Any) -> Optional[Identifier]:
    """Return the tagged identifier for a raw reference value, or None when absent."""
    if raw is None:
        return None
    if isinstance(raw, ObjectId):
        return NativeKey(raw)
    text = str(raw).strip()
    if not text:
        return None
    if is_native_key(text):
        return NativeKey(ObjectId(text))
    return LegacyCode(text)


def lookup_key(raw: Any) -> Hashable:
    """Key under which resolve_all reports a raw value."""
    try:
        hash(raw)
    except TypeError:
        return str(raw)
    return raw


class ReferenceResolver:
    """Resolves raw reference values to entities.

    One instance serves one request: results are memoised per
    (type, identifier) for the lifetime of the instance and never shared.
    """

    def __init__(self, store: ReferenceStore):
        self.store = store
        self._memo: Dict[tuple, Resolution] = {}

    def resolve(self, ref_type: Union[str, ReferenceType], raw: Any) -> Resolution:
        return self.resolve_all(ref_type, [raw])[lookup_key(raw)]

    def resolve_all(self, ref_type: Union[str, ReferenceType], raws: Iterable[Any]) -> Dict[Hashable, Resolution]:
        """Resolve many raw values with at most one query per identifier class."""
        ref_type = get_reference_type(ref_type)

        identifiers: Dict[Hashable, Optional[Identifier]] = {}
        raw_values: Dict[Hashable, Any] = {}
        for raw in raws:
            key = lookup_key(raw)
            if key not in identifiers:
                identifiers[key] = classify_identifier(raw)
                raw_values[key] = raw

        pending_keys = set()
        pending_codes = set()
        for identifier in identifiers.values():
            if identifier is None or (ref_type.name, identifier) in self._memo:
                continue
            if isinstance(identifier, NativeKey):
                pending_keys.add(identifier.key)
            else:
                pending_codes.add(identifier.code)

        if pending_keys:
            self._load_keys(ref_type, pending_keys)
        if pending_codes:
            self._load_codes(ref_type, pending_codes)

        outcomes = {}
        for key, identifier in identifiers.items():
            if identifier is None:
                outcomes[key] = ABSENT
                continue
            outcome = self._memo[(ref_type.name, identifier)]
            # report the value as stored, not its normalised form
            outcomes[key] = Unresolved(raw_values[key]) if isinstance(outcome, Unresolved) else outcome
        return outcomes

    def _load_keys(self, ref_type: ReferenceType, keys: set):
        logger.debug(f"Resolving {len(keys)} native key(s) for {ref_type.name}")
        found = {doc["_id"]: doc for doc in self.store.find_by_keys(ref_type, sorted(keys))}
        for key in keys:
            entity = found.get(key)
            self._memo[(ref_type.name, NativeKey(key))] = Resolved(key, entity) if entity is not None else Unresolved(str(key))

    def _load_codes(self, ref_type: ReferenceType, codes: set):
        logger.debug(f"Resolving {len(codes)} legacy code(s) for {ref_type.name}")
        matches = defaultdict(list)
        for doc in self.store.find_by_legacy_codes(ref_type, sorted(codes)):
            matches[str(doc.get(ref_type.legacy_field))].append(doc)

        for code in codes:
            docs = matches.get(code)
            if not docs:
                self._memo[(ref_type.name, LegacyCode(code))] = Unresolved(code)
                continue
            if len(docs) > 1:
                logger.warning(
                    f"Legacy code '{code}' matches {len(docs)} {ref_type.name} records; using {docs[0]['_id']}"
                )
            self._memo[(ref_type.name, LegacyCode(code))] = Resolved(docs[0]["_id"], docs[0])
