import re

from grocery.services.reference_errors import CatalogError
from grocery.services.reference_filters import normalize_reference_filters
from grocery.services.reference_populator import FieldSpec, ReferencePopulator
from grocery.services.reference_resolver import ABSENT, ReferenceResolver, Unresolved
from grocery.services.reference_store import ReferenceStore, run_query
from grocery.services.reference_types import CATEGORY, DEPARTMENT, SUBCATEGORY
from grocery.utils.pagination import build_pagination, get_page_params, get_sort

# subcategory -> category -> department
SUBCATEGORY_FIELDS = (
    FieldSpec("category_id", CATEGORY, nested=(FieldSpec("dept_id", DEPARTMENT),)),
)
SUBCATEGORY_FILTERS = {"category_id": CATEGORY}
SUBCATEGORY_SORT_FIELDS = ("sub_category_name", "sequence_id", "createdAt")


class subcategory_tool:
    def __init__(self, database):
        self.client_database = database
        self.subcategories = self.client_database["subcategories"]
        self.resolver = ReferenceResolver(ReferenceStore(self.client_database))
        self.populator = ReferencePopulator(self.resolver)

    def subcategories_list(self, request_data):
        page, limit, skip = get_page_params(request_data, default_limit=50)
        sort = get_sort(request_data, SUBCATEGORY_SORT_FIELDS, "sub_category_name")

        query = {}
        if request_data.get('category_id') is not None:
            query['category_id'] = request_data['category_id']
        if request_data.get('search'):
            query['sub_category_name'] = {"$regex": re.escape(str(request_data['search'])), "$options": "i"}

        normalized = normalize_reference_filters(self.resolver, query, SUBCATEGORY_FILTERS)
        if normalized.matches_nothing:
            return {"data": [], "pagination": build_pagination(page, limit, 0)}

        total_count = run_query("subcategories", lambda: self.subcategories.count_documents(normalized.query))
        result = run_query(
            "subcategories",
            lambda: list(self.subcategories.find(normalized.query).sort(sort).skip(skip).limit(limit)),
        )

        return {
            "data": self.populator.populate_many(result, SUBCATEGORY_FIELDS),
            "pagination": build_pagination(page, limit, total_count),
        }

    def subcategory_details(self, request_data):
        outcome = self.resolver.resolve(SUBCATEGORY, request_data.get('sub_category_id') or request_data.get('_id'))
        if outcome is ABSENT:
            raise CatalogError("sub_category_id is required")
        if isinstance(outcome, Unresolved):
            raise CatalogError("Subcategory not found", status_code=404, code="NOT_FOUND")
        return {"data": self.populator.populate(outcome.entity, SUBCATEGORY_FIELDS)}
