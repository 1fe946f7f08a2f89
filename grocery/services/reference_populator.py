from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from grocery.services.reference_errors import MalformedFieldSpec
from grocery.services.reference_resolver import (
    ReferenceResolver,
    Resolution,
    Resolved,
    Unresolved,
    lookup_key,
)
from grocery.services.reference_types import ReferenceType, get_reference_type

UNRESOLVED_DISPLAY_NAME = "Unresolved reference"


@dataclass(frozen=True)
class FieldSpec:
    """Declares how one reference field of a record is populated.

    ``projection`` defaults to the type's summary fields. ``nested`` specs
    apply to the referenced entity and may only name its parent field.
    """
    field: str
    ref_type: Union[str, ReferenceType]
    projection: Optional[Tuple[str, ...]] = None
    nested: Tuple["FieldSpec", ...] = ()


def validate_field_specs(specs: Sequence[FieldSpec], owner: Optional[ReferenceType] = None) -> Tuple[FieldSpec, ...]:
    """Check specs and return them with reference types and projections filled in."""
    validated = []
    seen = set()
    for spec in specs:
        if not isinstance(spec, FieldSpec):
            raise MalformedFieldSpec(f"Expected FieldSpec, got {type(spec).__name__}")
        if not spec.field:
            raise MalformedFieldSpec("FieldSpec.field must be a non-empty field name")
        if spec.field in seen:
            raise MalformedFieldSpec(f"Field '{spec.field}' is declared more than once")
        seen.add(spec.field)

        ref_type = get_reference_type(spec.ref_type)
        if owner is not None:
            if spec.field != owner.parent_field or ref_type.name != owner.parent_type:
                raise MalformedFieldSpec(
                    f"{owner.name} has no '{spec.field}' reference to {ref_type.name}"
                )

        projection = tuple(spec.projection) if spec.projection is not None else ref_type.summary_fields
        unknown = [attr for attr in projection if attr not in ref_type.attributes]
        if unknown:
            raise MalformedFieldSpec(f"{ref_type.name} has no attribute(s): {', '.join(unknown)}")
        if ref_type.display_field not in projection:
            projection = (ref_type.display_field,) + projection

        nested = validate_field_specs(spec.nested, owner=ref_type)
        validated.append(FieldSpec(spec.field, ref_type, projection, nested))
    return tuple(validated)


def unresolved_reference(ref_type: ReferenceType, raw: str) -> Dict[str, Any]:
    return {"_id": raw, ref_type.display_field: UNRESOLVED_DISPLAY_NAME, "unresolved": True}


def _summary(spec: FieldSpec, outcome: Resolved) -> Dict[str, Any]:
    summary = {"_id": outcome.key}
    for attr in spec.projection:
        summary[attr] = outcome.entity.get(attr)
    # raw parent value; the next level replaces it
    for nested in spec.nested:
        summary[nested.field] = outcome.entity.get(nested.field)
    return summary


class ReferencePopulator:
    """Replaces reference fields with summaries of the entities they point at."""

    def __init__(self, resolver: ReferenceResolver):
        self.resolver = resolver

    def populate(self, record: Optional[Dict[str, Any]], specs: Sequence[FieldSpec]) -> Optional[Dict[str, Any]]:
        if record is None:
            validate_field_specs(specs)
            return None
        return self.populate_many([record], specs)[0]

    def populate_many(self, records: Sequence[Dict[str, Any]], specs: Sequence[FieldSpec]) -> List[Dict[str, Any]]:
        """Populate every record, resolving each level of the chain in one batch per type.

        Input records are not modified; output order matches input order.
        """
        specs = validate_field_specs(specs)
        populated = [dict(record) for record in records]
        targets = [(record, specs) for record in populated]
        while targets:
            targets = self._populate_level(targets)
        return populated

    def _populate_level(self, targets: List[Tuple[Dict[str, Any], Tuple[FieldSpec, ...]]]):
        wanted = defaultdict(list)
        for doc, specs in targets:
            for spec in specs:
                wanted[spec.ref_type].append(doc.get(spec.field))

        outcomes: Dict[ReferenceType, Dict[Any, Resolution]] = {
            ref_type: self.resolver.resolve_all(ref_type, raws)
            for ref_type, raws in wanted.items()
        }

        next_targets = []
        for doc, specs in targets:
            for spec in specs:
                outcome = outcomes[spec.ref_type][lookup_key(doc.get(spec.field))]
                if isinstance(outcome, Resolved):
                    summary = _summary(spec, outcome)
                    doc[spec.field] = summary
                    if spec.nested:
                        next_targets.append((summary, spec.nested))
                elif isinstance(outcome, Unresolved):
                    doc[spec.field] = unresolved_reference(spec.ref_type, outcome.raw)
                else:
                    doc[spec.field] = None
        return next_targets
