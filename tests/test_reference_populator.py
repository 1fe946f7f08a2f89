import copy

import pytest

from catalog_data import (
    BROKEN_SUBCATEGORY_ID,
    CATEGORIES,
    GROCERY_ID,
    OIL_ID,
    REFERENCE_COLLECTIONS,
    RICE_ID,
    SUBCATEGORIES,
)
from grocery.services.reference_errors import MalformedFieldSpec, StoreUnavailable
from grocery.services.reference_populator import FieldSpec, ReferencePopulator
from grocery.services.reference_resolver import ReferenceResolver
from grocery.services.reference_store import ReferenceStore
from grocery.services.reference_types import CATEGORY, DEPARTMENT, SUBCATEGORY
from grocery.services.product_service import PRODUCT_FIELDS


@pytest.fixture()
def populator(resolver):
    return ReferencePopulator(resolver)


def _product(index, **refs):
    product = {"pcode": f"P{index:03d}", "product_name": f"Product {index}"}
    product.update(refs)
    return product


def test_populates_category_with_legacy_department_code(populator):
    rice = copy.deepcopy(CATEGORIES[0])

    result = populator.populate(rice, [FieldSpec("dept_id", DEPARTMENT)])

    assert result["dept_id"] == {
        "_id": GROCERY_ID,
        "department_name": "Grocery",
        "image_link": "https://cdn.example.com/d/18.png",
        "sequence_id": 1,
    }
    assert result["category_name"] == "Rice"


def test_dangling_reference_becomes_sentinel(populator):
    broken = copy.deepcopy(SUBCATEGORIES[2])

    result = populator.populate(broken, [FieldSpec("category_id", CATEGORY)])

    assert result["category_id"] == {
        "_id": "XYZ",
        "category_name": "Unresolved reference",
        "unresolved": True,
    }
    assert result["_id"] == BROKEN_SUBCATEGORY_ID


def test_absent_reference_becomes_none(populator):
    result = populator.populate(_product(1, dept_id=None), [FieldSpec("dept_id", DEPARTMENT)])
    assert result["dept_id"] is None


def test_missing_field_is_still_present_in_output(populator):
    result = populator.populate(_product(1), PRODUCT_FIELDS)

    assert result["dept_id"] is None
    assert result["category_id"] is None
    assert result["sub_category_id"] is None


def test_populate_none_record(populator):
    assert populator.populate(None, [FieldSpec("dept_id", DEPARTMENT)]) is None


def test_input_records_are_not_modified(populator):
    record = _product(1, dept_id="18")
    populator.populate_many([record], [FieldSpec("dept_id", DEPARTMENT)])
    assert record["dept_id"] == "18"


def test_three_level_chain(populator):
    product = _product(1, dept_id="19", category_id="118", sub_category_id="501")

    result = populator.populate(product, PRODUCT_FIELDS)

    assert result["dept_id"]["department_name"] == "Dairy"
    assert result["category_id"]["_id"] == OIL_ID
    assert result["category_id"]["dept_id"]["_id"] == GROCERY_ID
    assert result["sub_category_id"]["sub_category_name"] == "Basmati"
    assert result["sub_category_id"]["category_id"]["_id"] == RICE_ID
    assert result["sub_category_id"]["category_id"]["category_name"] == "Rice"


def test_nested_unresolved_parent_is_sentinel(populator):
    orphan = copy.deepcopy(CATEGORIES[3])
    spec = [FieldSpec("category_id", CATEGORY, nested=(FieldSpec("dept_id", DEPARTMENT),))]

    result = populator.populate({"category_id": orphan["_id"]}, spec)

    assert result["category_id"]["category_name"] == "Orphaned"
    assert result["category_id"]["dept_id"] == {
        "_id": "999",
        "department_name": "Unresolved reference",
        "unresolved": True,
    }


def test_shared_reference_resolved_once_for_many_records(catalog_db, populator):
    products = [_product(i, dept_id="18", category_id="118", sub_category_id="502") for i in range(50)]

    result = populator.populate_many(products, [
        FieldSpec("dept_id", DEPARTMENT),
        FieldSpec("category_id", CATEGORY),
        FieldSpec("sub_category_id", SUBCATEGORY),
    ])

    assert len(catalog_db.calls(*REFERENCE_COLLECTIONS)) == 3
    assert all(item["category_id"] == result[0]["category_id"] for item in result)
    assert result[0]["category_id"]["category_name"] == "Oils"


def test_query_count_does_not_grow_with_records(catalog_db):
    refs = [
        {"dept_id": "18", "category_id": str(RICE_ID), "sub_category_id": "501"},
        {"dept_id": str(GROCERY_ID), "category_id": "118", "sub_category_id": "nope"},
        {"dept_id": None, "category_id": "bad-code", "sub_category_id": ""},
    ]

    def count_for(n):
        catalog_db.reset_calls()
        records = [_product(i, **refs[i % len(refs)]) for i in range(n)]
        ReferencePopulator(ReferenceResolver(ReferenceStore(catalog_db))).populate_many(records, PRODUCT_FIELDS)
        return len(catalog_db.calls(*REFERENCE_COLLECTIONS))

    small, large = count_for(3), count_for(300)

    assert small == large
    # three levels at most, two identifier classes per type
    assert large <= 3 * 2 * 3


def test_output_order_matches_input(populator):
    records = [_product(i, category_id=code) for i, code in enumerate(["120", "89", "xyz", "118", None, "89"])]

    result = populator.populate_many(records, [FieldSpec("category_id", CATEGORY)])

    assert [r["pcode"] for r in result] == [r["pcode"] for r in records]
    names = [r["category_id"]["category_name"] if r["category_id"] else None for r in result]
    assert names == ["Milk", "Rice", "Unresolved reference", "Oils", None, "Rice"]


def test_custom_projection_keeps_display_field(populator):
    result = populator.populate(
        _product(1, dept_id="18"),
        [FieldSpec("dept_id", DEPARTMENT, projection=("sequence_id",))],
    )
    assert result["dept_id"] == {"_id": GROCERY_ID, "department_name": "Grocery", "sequence_id": 1}


@pytest.mark.parametrize("spec", [
    FieldSpec("dept_id", DEPARTMENT, projection=("colour",)),
    FieldSpec("dept_id", "aisle"),
    FieldSpec("", DEPARTMENT),
    FieldSpec("category_id", CATEGORY, nested=(FieldSpec("category_id", CATEGORY),)),
    FieldSpec("category_id", CATEGORY, nested=(FieldSpec("dept_id", SUBCATEGORY),)),
    FieldSpec("dept_id", DEPARTMENT, nested=(FieldSpec("dept_id", DEPARTMENT),)),
])
def test_malformed_specs_fail_fast(catalog_db, populator, spec):
    with pytest.raises(MalformedFieldSpec):
        populator.populate_many([_product(1, dept_id="18", category_id="89")], [spec])
    assert catalog_db.calls(*REFERENCE_COLLECTIONS) == []


def test_duplicate_field_spec_is_rejected(populator):
    with pytest.raises(MalformedFieldSpec):
        populator.populate(_product(1), [FieldSpec("dept_id", DEPARTMENT), FieldSpec("dept_id", DEPARTMENT)])


def test_store_failure_aborts_population(catalog_db, populator):
    catalog_db["subcategories"].fail = True

    with pytest.raises(StoreUnavailable):
        populator.populate_many([_product(1, dept_id="18", sub_category_id="501")], PRODUCT_FIELDS)


def test_sentinel_keeps_the_stored_spelling(populator):
    records = [
        {"category_id": " XYZ "},
        {"category_id": "0123456789ABCDEF01234567"},
        {"category_id": "XYZ"},
    ]

    result = populator.populate_many(records, [FieldSpec("category_id", CATEGORY)])

    assert [r["category_id"]["_id"] for r in result] == [" XYZ ", "0123456789ABCDEF01234567", "XYZ"]
    assert all(r["category_id"]["unresolved"] for r in result)
