from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response

from grocery.api.routes.common import handle_service_call
from grocery.database import get_database
from grocery.middlewares.product_middleware import ProductDataProcessor

router = APIRouter(tags=["products"])

@router.post("/get_active_products_list")
async def product_list(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instance = ProductDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instance.products_list(request_data),
        msg="Products retrieved successfully",
        failure_msg="Failed to retrieve products",
    )

@router.post("/get_product_details")
async def product_details(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instance = ProductDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instance.product_details(request_data),
        msg="Product details retrieved successfully",
        failure_msg="Failed to retrieve product details",
    )

@router.post("/get_products_by_pcodes")
async def products_by_pcodes(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instance = ProductDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instance.products_by_pcodes(request_data),
        msg="Products retrieved successfully",
        failure_msg="Failed to retrieve products",
    )

@router.post("/get_search_autocomplete_results")
async def search_autocomplete(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instance = ProductDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instance.search_autocomplete(request_data),
        msg="Search results retrieved successfully",
        failure_msg="Failed to retrieve search results",
    )
