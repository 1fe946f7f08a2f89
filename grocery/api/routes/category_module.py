from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response

from grocery.api.routes.common import handle_service_call
from grocery.database import get_database
from grocery.middlewares.category_middleware import CategoryDataProcessor, SubCategoryDataProcessor

router = APIRouter(tags=["categories"])
subcategory_router = APIRouter(tags=["subcategories"])

@router.post("/get_category_list")
async def category_list(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = CategoryDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.categories_list(request_data),
        msg="Categories retrieved successfully",
        failure_msg="Failed to retrieve categories",
    )

@router.post("/get_category_details")
async def category_details(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = CategoryDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.category_details(request_data),
        msg="Category details retrieved successfully",
        failure_msg="Failed to retrieve category details",
    )

@subcategory_router.post("/get_subcategory_list")
async def subcategory_list(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = SubCategoryDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.subcategories_list(request_data),
        msg="Subcategories retrieved successfully",
        failure_msg="Failed to retrieve subcategories",
    )

@subcategory_router.post("/get_subcategory_details")
async def subcategory_details(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = SubCategoryDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.subcategory_details(request_data),
        msg="Subcategory details retrieved successfully",
        failure_msg="Failed to retrieve subcategory details",
    )
