from grocery.services.reference_errors import CatalogError
from grocery.services.reference_store import run_query

POPUP_BANNER_TYPE = 6


class banner_tool:
    def __init__(self, database):
        self.client_database = database
        self.banners = self.client_database["banners"]

    def _store_code(self, request_data):
        store_code = request_data.get('store_code')
        if not store_code:
            raise CatalogError("store_code is required")
        return str(store_code)

    def _enabled(self, query, sort):
        query = dict(query, is_active="Enabled")
        return run_query("banners", lambda: list(self.banners.find(query).sort(sort)))

    def banners_list(self, request_data):
        banner_type_id = request_data.get('banner_type_id')
        if banner_type_id in (None, ""):
            raise CatalogError("banner_type_id and store_code are required")
        store_code = self._store_code(request_data)
        try:
            banner_type_id = int(banner_type_id)
        except (TypeError, ValueError):
            raise CatalogError("banner_type_id must be an integer") from None

        banners = self._enabled({"banner_type_id": banner_type_id, "store_code": store_code}, "sequence_id")
        return {"data": banners, "count": len(banners)}

    def popup_banners(self, request_data):
        return self.banners_list(dict(request_data, banner_type_id=POPUP_BANNER_TYPE))

    def all_banners(self, request_data):
        """Enabled banners of a store grouped by banner_type_id."""
        store_code = self._store_code(request_data)
        banners = self._enabled({"store_code": store_code}, [("banner_type_id", 1), ("sequence_id", 1)])

        grouped = {}
        for banner in banners:
            grouped.setdefault(str(banner.get('banner_type_id')), []).append(banner)
        return {"data": grouped, "total_count": len(banners)}
