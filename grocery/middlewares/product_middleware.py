from grocery.services.product_service import product_tool

class ProductDataProcessor:
    def __init__(self, database):
        self.database = database

    def products_list(self, request_data, include_inactive=False):
        """
        Get paginated list of products with department, category and subcategory populated
        """
        processor = product_tool(self.database)
        result = processor.products_list(request_data, include_inactive=include_inactive)
        return result

    def product_details(self, request_data):
        processor = product_tool(self.database)
        result = processor.product_details(request_data)
        return result

    def products_by_pcodes(self, request_data):
        processor = product_tool(self.database)
        result = processor.products_by_pcodes(request_data)
        return result

    def search_autocomplete(self, request_data):
        processor = product_tool(self.database)
        result = processor.search_autocomplete(request_data)
        return result
