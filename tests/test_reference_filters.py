from catalog_data import GROCERY_ID, OIL_ID
from grocery.services.reference_filters import normalize_reference_filters
from grocery.services.reference_types import CATEGORY, DEPARTMENT


def test_resolved_filter_matches_every_stored_spelling(resolver):
    normalized = normalize_reference_filters(resolver, {"dept_id": "18", "store_code": "S01"}, {"dept_id": DEPARTMENT})

    assert not normalized.matches_nothing
    assert normalized.query == {
        "dept_id": {"$in": [GROCERY_ID, str(GROCERY_ID), "18"]},
        "store_code": "S01",
    }


def test_native_key_filter_also_matches_legacy_spelling(resolver):
    normalized = normalize_reference_filters(resolver, {"category_id": str(OIL_ID)}, {"category_id": "category"})
    assert normalized.query["category_id"] == {"$in": [OIL_ID, str(OIL_ID), "118"]}


def test_unresolved_filter_matches_nothing(resolver):
    normalized = normalize_reference_filters(
        resolver,
        {"dept_id": "18", "category_id": "no-such-category"},
        {"dept_id": DEPARTMENT, "category_id": CATEGORY},
    )

    assert normalized.matches_nothing
    assert normalized.unresolved == {"category_id": "no-such-category"}
    assert "category_id" not in normalized.query


def test_absent_filter_is_dropped(resolver):
    normalized = normalize_reference_filters(resolver, {"dept_id": "", "store_code": "S01"}, {"dept_id": DEPARTMENT})

    assert not normalized.matches_nothing
    assert normalized.query == {"store_code": "S01"}


def test_operator_objects_are_not_passed_through(resolver):
    normalized = normalize_reference_filters(resolver, {"dept_id": {"$ne": None}}, {"dept_id": DEPARTMENT})
    assert normalized.matches_nothing


def test_caller_query_is_not_modified(resolver):
    query = {"dept_id": "18"}
    normalize_reference_filters(resolver, query, {"dept_id": DEPARTMENT})
    assert query == {"dept_id": "18"}


def test_object_id_filter_value(resolver):
    normalized = normalize_reference_filters(resolver, {"dept_id": GROCERY_ID}, {"dept_id": DEPARTMENT})
    assert normalized.query["dept_id"] == {"$in": [GROCERY_ID, str(GROCERY_ID), "18"]}


def test_unresolved_filter_reports_value_as_given(resolver):
    normalized = normalize_reference_filters(resolver, {"dept_id": " 404 "}, {"dept_id": DEPARTMENT})

    assert normalized.matches_nothing
    assert normalized.unresolved == {"dept_id": " 404 "}
