from grocery.services.banner_service import banner_tool
from grocery.services.department_service import department_tool
from grocery.services.reference_audit_service import reference_audit_tool
from grocery.utils.pagination import get_page_params

class DepartmentDataProcessor:
    def __init__(self, database):
        self.database = database

    def departments_list(self, request_data):
        processor = department_tool(self.database)
        result = processor.departments_list(request_data)
        return result

    def department_details(self, request_data):
        """
        Get department details by ObjectId or legacy department_id
        """
        processor = department_tool(self.database)
        result = processor.department_details(request_data)
        return result

    def popular_categories(self, request_data, list_number):
        processor = department_tool(self.database)
        result = processor.popular_categories(request_data, list_number)
        return result

    def seasonal_picks(self, request_data):
        processor = department_tool(self.database)
        result = processor.seasonal_picks(request_data)
        return result


class BannerDataProcessor:
    def __init__(self, database):
        self.database = database

    def banners_list(self, request_data):
        processor = banner_tool(self.database)
        result = processor.banners_list(request_data)
        return result

    def popup_banners(self, request_data):
        processor = banner_tool(self.database)
        result = processor.popup_banners(request_data)
        return result

    def all_banners(self, request_data):
        """
        Get every enabled banner of a store grouped by banner type
        """
        processor = banner_tool(self.database)
        result = processor.all_banners(request_data)
        return result


class ReferenceAuditProcessor:
    def __init__(self, database):
        self.database = database

    def reference_audit(self, request_data):
        """
        Report stored reference values that no longer resolve
        """
        processor = reference_audit_tool(self.database)
        _, sample_size, _ = get_page_params({"limit": request_data.get('sample_size')}, default_limit=20)
        result = processor.reference_audit(sample_size=sample_size)
        return result
