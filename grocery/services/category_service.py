import re

from grocery.services.reference_errors import CatalogError
from grocery.services.reference_filters import normalize_reference_filters
from grocery.services.reference_populator import FieldSpec, ReferencePopulator
from grocery.services.reference_resolver import ABSENT, ReferenceResolver, Unresolved
from grocery.services.reference_store import ReferenceStore, run_query
from grocery.services.reference_types import CATEGORY, DEPARTMENT
from grocery.utils.pagination import build_pagination, get_page_params, get_sort

CATEGORY_FIELDS = (FieldSpec("dept_id", DEPARTMENT),)
CATEGORY_FILTERS = {"dept_id": DEPARTMENT}
CATEGORY_SORT_FIELDS = ("sequence_id", "category_name", "createdAt")


class category_tool:
    def __init__(self, database):
        self.client_database = database
        self.categories = self.client_database["categories"]
        self.resolver = ReferenceResolver(ReferenceStore(self.client_database))
        self.populator = ReferencePopulator(self.resolver)

    def categories_list(self, request_data):
        page, limit, skip = get_page_params(request_data, default_limit=50)
        sort = get_sort(request_data, CATEGORY_SORT_FIELDS, "sequence_id")

        query = {}
        if request_data.get('dept_id') is not None:
            query['dept_id'] = request_data['dept_id']
        if request_data.get('store_code'):
            query['store_code'] = str(request_data['store_code'])
        if request_data.get('search'):
            query['category_name'] = {"$regex": re.escape(str(request_data['search'])), "$options": "i"}

        filters = {
            "dept_id": request_data.get('dept_id'),
            "store_code": request_data.get('store_code'),
            "search": request_data.get('search'),
        }

        normalized = normalize_reference_filters(self.resolver, query, CATEGORY_FILTERS)
        if normalized.matches_nothing:
            return {"data": [], "pagination": build_pagination(page, limit, 0), "filters": filters}

        total_count = run_query("categories", lambda: self.categories.count_documents(normalized.query))
        result = run_query(
            "categories",
            lambda: list(self.categories.find(normalized.query).sort(sort).skip(skip).limit(limit)),
        )

        return {
            "data": self.populator.populate_many(result, CATEGORY_FIELDS),
            "pagination": build_pagination(page, limit, total_count),
            "filters": filters,
        }

    def category_details(self, request_data):
        """
        Get a category by ObjectId or legacy category code, with its department
        """
        outcome = self.resolver.resolve(CATEGORY, request_data.get('category_id') or request_data.get('_id'))
        if outcome is ABSENT:
            raise CatalogError("category_id is required")
        if isinstance(outcome, Unresolved):
            raise CatalogError("Category not found", status_code=404, code="NOT_FOUND")
        return {"data": self.populator.populate(outcome.entity, CATEGORY_FIELDS)}
