from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple, Union

from grocery.services.reference_errors import MalformedFieldSpec


@dataclass(frozen=True)
class ReferenceType:
    """A collection that other records point at by native key or legacy code."""
    name: str
    collection: str
    legacy_field: str
    display_field: str
    summary_fields: Tuple[str, ...]
    attributes: FrozenSet[str]
    parent_field: Optional[str] = None
    parent_type: Optional[str] = None


DEPARTMENT = ReferenceType(
    name="department",
    collection="departments",
    legacy_field="department_id",
    display_field="department_name",
    summary_fields=("department_name", "image_link", "sequence_id"),
    attributes=frozenset({
        "department_id", "department_name", "dept_type_id", "dept_no_of_col",
        "store_code", "image_link", "sequence_id",
    }),
)

CATEGORY = ReferenceType(
    name="category",
    collection="categories",
    legacy_field="idcategory_master",
    display_field="category_name",
    summary_fields=("category_name", "image_link", "sequence_id"),
    attributes=frozenset({
        "idcategory_master", "category_name", "dept_id", "store_code",
        "image_link", "sequence_id", "is_active", "description",
    }),
    parent_field="dept_id",
    parent_type="department",
)

SUBCATEGORY = ReferenceType(
    name="subcategory",
    collection="subcategories",
    legacy_field="idsub_category_master",
    display_field="sub_category_name",
    summary_fields=("sub_category_name",),
    attributes=frozenset({
        "idsub_category_master", "sub_category_name", "category_id",
        "main_category_name", "image_link", "sequence_id",
    }),
    parent_field="category_id",
    parent_type="category",
)

REFERENCE_TYPES: Dict[str, ReferenceType] = {
    ref_type.name: ref_type for ref_type in (DEPARTMENT, CATEGORY, SUBCATEGORY)
}


def get_reference_type(ref_type: Union[str, ReferenceType]) -> ReferenceType:
    """Accept a registered ReferenceType or its name; anything else is a caller defect."""
    if isinstance(ref_type, ReferenceType):
        if REFERENCE_TYPES.get(ref_type.name) is not ref_type:
            raise MalformedFieldSpec(f"Reference type '{ref_type.name}' is not registered")
        return ref_type
    try:
        return REFERENCE_TYPES[ref_type]
    except (KeyError, TypeError):
        raise MalformedFieldSpec(f"Unknown reference type: {ref_type!r}") from None
