from grocery.services.category_service import CATEGORY_FIELDS, CATEGORY_FILTERS
from grocery.services.reference_errors import CatalogError
from grocery.services.reference_filters import normalize_reference_filters
from grocery.services.reference_populator import ReferencePopulator
from grocery.services.reference_resolver import ABSENT, ReferenceResolver, Unresolved
from grocery.services.reference_store import ReferenceStore, run_query
from grocery.services.reference_types import DEPARTMENT

POPULAR_CATEGORY_LISTS = range(1, 6)
SEASONAL_DEPT_TYPE = "2"


class department_tool:
    def __init__(self, database):
        self.client_database = database
        self.departments = self.client_database["departments"]
        self.categories = self.client_database["categories"]
        self.resolver = ReferenceResolver(ReferenceStore(self.client_database))
        self.populator = ReferencePopulator(self.resolver)

    def departments_list(self, request_data):
        query = {}
        if request_data.get('store_code'):
            query['store_code'] = str(request_data['store_code'])
        if request_data.get('dept_type_id') is not None:
            query['dept_type_id'] = str(request_data['dept_type_id'])

        departments = run_query(
            "departments",
            lambda: list(self.departments.find(query).sort("sequence_id", 1)),
        )
        return {"data": departments, "count": len(departments)}

    def department_details(self, request_data):
        outcome = self.resolver.resolve(DEPARTMENT, request_data.get('department_id') or request_data.get('_id'))
        if outcome is ABSENT:
            raise CatalogError("department_id is required")
        if isinstance(outcome, Unresolved):
            raise CatalogError("Department not found", status_code=404, code="NOT_FOUND")
        return {"data": outcome.entity}

    def popular_categories(self, request_data, list_number):
        """
        Categories of one department, for the home page's popular category rows
        """
        if list_number not in POPULAR_CATEGORY_LISTS:
            raise CatalogError(f"Unknown popular category list {list_number}", status_code=404, code="NOT_FOUND")
        department_id = request_data.get('department_id')
        if department_id in (None, ""):
            raise CatalogError("department_id is required")

        query = {"dept_id": department_id}
        if request_data.get('store_code'):
            query['store_code'] = str(request_data['store_code'])

        normalized = normalize_reference_filters(self.resolver, query, CATEGORY_FILTERS)
        categories = []
        if not normalized.matches_nothing:
            categories = run_query(
                "categories",
                lambda: list(self.categories.find(normalized.query).sort("sequence_id", 1)),
            )
        return {
            "data": self.populator.populate_many(categories, CATEGORY_FIELDS),
            "count": len(categories),
            "list_number": list_number,
        }

    def seasonal_picks(self, request_data):
        request_data = dict(request_data, dept_type_id=SEASONAL_DEPT_TYPE)
        return self.departments_list(request_data)
