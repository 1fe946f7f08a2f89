from grocery.services.reference_resolver import (
    NativeKey,
    ReferenceResolver,
    Unresolved,
    classify_identifier,
    lookup_key,
)
from grocery.services.reference_store import ReferenceStore, run_query
from grocery.services.reference_types import CATEGORY, DEPARTMENT, SUBCATEGORY

AUDITED_FIELDS = (
    ("categories", "dept_id", DEPARTMENT),
    ("subcategories", "category_id", CATEGORY),
    ("products", "dept_id", DEPARTMENT),
    ("products", "category_id", CATEGORY),
    ("products", "sub_category_id", SUBCATEGORY),
)


class reference_audit_tool:
    """Read-only report of how stored reference fields resolve."""

    def __init__(self, database):
        self.client_database = database
        self.resolver = ReferenceResolver(ReferenceStore(self.client_database))

    def reference_audit(self, sample_size: int = 20) -> dict:
        fields = []
        unresolved_total = 0
        for collection_name, field_name, ref_type in AUDITED_FIELDS:
            collection = self.client_database[collection_name]
            values = run_query(collection_name, lambda: collection.distinct(field_name))
            outcomes = self.resolver.resolve_all(ref_type, values)

            native = legacy = 0
            unresolved = []
            for value in values:
                identifier = classify_identifier(value)
                if identifier is None:
                    continue
                if isinstance(identifier, NativeKey):
                    native += 1
                else:
                    legacy += 1
                outcome = outcomes[lookup_key(value)]
                if isinstance(outcome, Unresolved):
                    unresolved.append(outcome.raw)

            unresolved_total += len(unresolved)
            fields.append({
                "collection": collection_name,
                "field": field_name,
                "reference_type": ref_type.name,
                "distinct_values": len(values),
                "native_keys": native,
                "legacy_codes": legacy,
                "unresolved": len(unresolved),
                "unresolved_sample": sorted(unresolved, key=str)[:sample_size],
            })

        return {"data": fields, "unresolved_total": unresolved_total}
