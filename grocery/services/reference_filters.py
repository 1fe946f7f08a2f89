from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from grocery.services.reference_resolver import ReferenceResolver, Resolved, Unresolved, lookup_key
from grocery.services.reference_types import ReferenceType, get_reference_type


@dataclass
class NormalizedFilter:
    query: Dict[str, Any]
    matches_nothing: bool = False
    unresolved: Dict[str, Any] = field(default_factory=dict)


def stored_spellings(ref_type: ReferenceType, outcome: Resolved) -> List[Any]:
    """Every value a record may store to point at the resolved entity."""
    spellings = [outcome.key, str(outcome.key)]
    legacy_code = outcome.entity.get(ref_type.legacy_field)
    if legacy_code not in (None, ""):
        spellings.append(str(legacy_code))
    return spellings


def normalize_reference_filters(
    resolver: ReferenceResolver,
    query: Mapping[str, Any],
    reference_fields: Mapping[str, Union[str, ReferenceType]],
) -> NormalizedFilter:
    """Rewrite caller-supplied reference filter values into canonical matches.

    Absent values drop the condition. An unresolved value marks the filter as
    matching nothing so the caller can skip the primary query.
    """
    normalized = dict(query)
    by_type = defaultdict(list)
    for field_name, ref_type in reference_fields.items():
        if field_name in normalized:
            by_type[get_reference_type(ref_type)].append(field_name)

    result = NormalizedFilter(query=normalized)
    for ref_type, field_names in by_type.items():
        outcomes = resolver.resolve_all(ref_type, [normalized[name] for name in field_names])
        for name in field_names:
            raw = normalized[name]
            outcome = outcomes[lookup_key(raw)]
            if isinstance(outcome, Resolved):
                normalized[name] = {"$in": stored_spellings(ref_type, outcome)}
            elif isinstance(outcome, Unresolved):
                result.matches_nothing = True
                result.unresolved[name] = outcome.raw
                del normalized[name]
            else:
                del normalized[name]
    return result
