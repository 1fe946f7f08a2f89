from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response

from grocery.api.routes.common import handle_service_call
from grocery.database import get_database
from grocery.middlewares.category_middleware import CategoryDataProcessor, SubCategoryDataProcessor
from grocery.middlewares.department_middleware import ReferenceAuditProcessor
from grocery.middlewares.product_middleware import ProductDataProcessor
from grocery.utils.auth_utils import get_current_user

router = APIRouter(tags=["admin"], dependencies=[Depends(get_current_user)])

@router.post("/get_all_categories")
async def all_categories(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = CategoryDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.categories_list(request_data),
        msg="Categories retrieved successfully",
        failure_msg="Failed to retrieve categories",
    )

@router.post("/get_all_subcategories")
async def all_subcategories(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = SubCategoryDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.subcategories_list(request_data),
        msg="Subcategories retrieved successfully",
        failure_msg="Failed to retrieve subcategories",
    )

@router.post("/get_all_products")
async def all_products(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instance = ProductDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instance.products_list(request_data, include_inactive=True),
        msg="Products retrieved successfully",
        failure_msg="Failed to retrieve products",
    )

@router.post("/reference_audit")
async def reference_audit(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instance = ReferenceAuditProcessor(database)
    return handle_service_call(
        response,
        lambda: instance.reference_audit(request_data),
        msg="Reference audit completed",
        failure_msg="Failed to run reference audit",
    )
