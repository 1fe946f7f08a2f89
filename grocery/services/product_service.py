import re

from grocery.services.reference_errors import CatalogError
from grocery.services.reference_filters import normalize_reference_filters
from grocery.services.reference_populator import FieldSpec, ReferencePopulator
from grocery.services.reference_resolver import ReferenceResolver
from grocery.services.reference_store import ReferenceStore, run_query
from grocery.services.reference_types import CATEGORY, DEPARTMENT, SUBCATEGORY
from grocery.utils.pagination import build_pagination, get_page_params, get_sort

PRODUCT_FIELDS = (
    FieldSpec("dept_id", DEPARTMENT),
    FieldSpec("category_id", CATEGORY, nested=(FieldSpec("dept_id", DEPARTMENT),)),
    FieldSpec("sub_category_id", SUBCATEGORY, nested=(FieldSpec("category_id", CATEGORY),)),
)
PRODUCT_FILTERS = {
    "dept_id": DEPARTMENT,
    "category_id": CATEGORY,
    "sub_category_id": SUBCATEGORY,
}
PRODUCT_SORT_FIELDS = ("product_name", "our_price", "createdAt", "brand_name")
SEARCH_FIELDS = ("product_name", "product_description", "brand_name")


def _price(request_data, key):
    value = request_data.get(key)
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise CatalogError(f"{key} must be a number") from None


def _pcode_query(codes):
    return {"$or": [{"pcode": {"$in": codes}}, {"p_code": {"$in": codes}}]}


class product_tool:
    def __init__(self, database):
        self.client_database = database
        self.products = self.client_database["products"]
        self.resolver = ReferenceResolver(ReferenceStore(self.client_database))
        self.populator = ReferencePopulator(self.resolver)

    def products_list(self, request_data: dict, include_inactive: bool = False) -> dict:
        page, limit, skip = get_page_params(request_data)
        sort = get_sort(request_data, PRODUCT_SORT_FIELDS, "product_name")

        query = {}
        for field_name in PRODUCT_FILTERS:
            if request_data.get(field_name) is not None:
                query[field_name] = request_data[field_name]
        if request_data.get('store_code'):
            query['store_code'] = str(request_data['store_code'])

        min_price = _price(request_data, 'min_price')
        max_price = _price(request_data, 'max_price')
        if min_price is not None or max_price is not None:
            query['our_price'] = {}
            if min_price is not None:
                query['our_price']['$gte'] = min_price
            if max_price is not None:
                query['our_price']['$lte'] = max_price

        if request_data.get('search'):
            pattern = re.escape(str(request_data['search']))
            query['$or'] = [{name: {"$regex": pattern, "$options": "i"}} for name in SEARCH_FIELDS]

        if not include_inactive:
            query['pcode_status'] = 'Y'

        filters = {name: request_data.get(name) for name in ("dept_id", "category_id", "sub_category_id", "store_code", "search")}

        normalized = normalize_reference_filters(self.resolver, query, PRODUCT_FILTERS)
        if normalized.matches_nothing:
            return {"data": [], "pagination": build_pagination(page, limit, 0), "filters": filters}

        total_count = run_query("products", lambda: self.products.count_documents(normalized.query))
        products = run_query(
            "products",
            lambda: list(self.products.find(normalized.query).sort(sort).skip(skip).limit(limit)),
        )

        return {
            "data": self.populator.populate_many(products, PRODUCT_FIELDS),
            "pagination": build_pagination(page, limit, total_count),
            "filters": filters,
        }

    def product_details(self, request_data: dict) -> dict:
        pcode = request_data.get('pcode') or request_data.get('p_code')
        if pcode in (None, ""):
            raise CatalogError("pcode is required")

        product = run_query("products", lambda: self.products.find_one(_pcode_query([str(pcode)])))
        if not product:
            raise CatalogError("Product not found", status_code=404, code="NOT_FOUND")
        return {"data": self.populator.populate(product, PRODUCT_FIELDS)}

    def products_by_pcodes(self, request_data: dict) -> dict:
        pcodes = request_data.get('pcodes') or request_data.get('p_codes')
        if not isinstance(pcodes, list) or not pcodes:
            raise CatalogError("pcodes must be a non-empty list")

        codes = [str(code) for code in pcodes]
        products = run_query("products", lambda: list(self.products.find(_pcode_query(codes))))

        # Keep the order the caller asked in
        position = {code: index for index, code in reversed(list(enumerate(codes)))}
        products.sort(key=lambda p: position.get(str(p.get('pcode') or p.get('p_code')), len(codes)))

        return {
            "data": self.populator.populate_many(products, PRODUCT_FIELDS),
            "count": len(products),
            "requested_pcodes": codes,
            "found_pcodes": [str(p.get('pcode') or p.get('p_code')) for p in products],
        }

    def search_autocomplete(self, request_data: dict) -> dict:
        product_name = request_data.get('product_name')
        if not product_name:
            raise CatalogError("product_name is required")
        _, limit, _ = get_page_params({"limit": request_data.get('limit')}, default_limit=10)

        query = {
            "product_name": {"$regex": re.escape(str(product_name)), "$options": "i"},
            "pcode_status": "Y",
        }
        products = run_query(
            "products",
            lambda: list(self.products.find(query, {"product_name": 1}).sort("product_name", 1).limit(limit)),
        )

        names = []
        for product in products:
            name = product.get('product_name')
            if name and name not in names:
                names.append(name)
        return {"data": names, "count": len(names), "search_term": product_name}
