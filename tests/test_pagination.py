import pytest

from config import settings
from grocery.services.reference_errors import CatalogError
from grocery.utils.pagination import build_pagination, get_page_params, get_sort
from grocery.utils.response import format_response
from catalog_data import GROCERY_ID


def test_page_params_defaults_and_cap():
    assert get_page_params({}) == (1, settings.DEFAULT_PAGE_LIMIT, 0)
    assert get_page_params({"page": "3", "limit": 10}) == (3, 10, 20)
    assert get_page_params({"limit": 10_000})[1] == settings.MAX_PAGE_LIMIT


@pytest.mark.parametrize("request_data", [{"page": -1}, {"limit": 0}, {"page": "two"}])
def test_page_params_reject_invalid(request_data):
    with pytest.raises(CatalogError):
        get_page_params(request_data)


def test_build_pagination_for_empty_result():
    assert build_pagination(1, 20, 0) == {
        "current_page": 1,
        "total_pages": 0,
        "total_count": 0,
        "limit": 20,
        "has_next": False,
        "has_prev": False,
    }


def test_sort_defaults_and_direction():
    assert get_sort({}, ("name",), "name") == [("name", 1)]
    assert get_sort({"sort_by": "name", "sort_order": "DESC"}, ("name",), "name") == [("name", -1)]


def test_format_response_converts_object_ids():
    response = format_response(msg="ok", data={"dept_id": {"_id": GROCERY_ID}}, count=1)

    assert response == {
        "success": True,
        "message": "ok",
        "data": {"dept_id": {"_id": str(GROCERY_ID)}},
        "count": 1,
    }
