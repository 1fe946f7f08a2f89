from grocery.services.category_service import category_tool
from grocery.services.subcategory_service import subcategory_tool

class CategoryDataProcessor:
    def __init__(self, database):
        self.database = database

    def categories_list(self, request_data):
        """
        Get paginated list of categories with their departments populated
        """
        processor = category_tool(self.database)
        result = processor.categories_list(request_data)
        return result

    def category_details(self, request_data):
        """
        Get specific category details by ObjectId or legacy code
        """
        processor = category_tool(self.database)
        result = processor.category_details(request_data)
        return result


class SubCategoryDataProcessor:
    def __init__(self, database):
        self.database = database

    def subcategories_list(self, request_data):
        processor = subcategory_tool(self.database)
        result = processor.subcategories_list(request_data)
        return result

    def subcategory_details(self, request_data):
        processor = subcategory_tool(self.database)
        result = processor.subcategory_details(request_data)
        return result
