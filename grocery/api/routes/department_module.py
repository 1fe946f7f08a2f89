from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response

from grocery.api.routes.common import handle_service_call
from grocery.database import get_database
from grocery.middlewares.department_middleware import BannerDataProcessor, DepartmentDataProcessor

router = APIRouter(tags=["departments"])
banner_router = APIRouter(tags=["banners"])

@router.post("/get_active_department_list")
async def department_list(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = DepartmentDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.departments_list(request_data),
        msg="Active departments retrieved successfully",
        failure_msg="Failed to retrieve departments",
    )

@router.post("/get_department_details")
async def department_details(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = DepartmentDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.department_details(request_data),
        msg="Department details retrieved successfully",
        failure_msg="Failed to retrieve department details",
    )

@router.post("/get_popular_category_list_{list_number}")
async def popular_category_list(list_number: int, response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = DepartmentDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.popular_categories(request_data, list_number),
        msg=f"Popular categories list {list_number} retrieved successfully",
        failure_msg=f"Failed to retrieve popular categories list {list_number}",
    )

@router.post("/get_seasonal_picks")
async def seasonal_picks(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = DepartmentDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.seasonal_picks(request_data),
        msg="Seasonal picks retrieved successfully",
        failure_msg="Failed to retrieve seasonal picks",
    )

@banner_router.post("/get_banner")
async def banner_list(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = BannerDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.banners_list(request_data),
        msg="Banners retrieved successfully",
        failure_msg="Failed to retrieve banners",
    )

@banner_router.post("/get_popup_screen")
async def popup_screen(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = BannerDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.popup_banners(request_data),
        msg="Popup banners retrieved successfully",
        failure_msg="Failed to retrieve popup banners",
    )

@banner_router.post("/get_all_banners")
async def all_banners(response: Response, request_data: Dict[str, Any] = Body(default={}), database=Depends(get_database)):
    instanceClass = BannerDataProcessor(database)
    return handle_service_call(
        response,
        lambda: instanceClass.all_banners(request_data),
        msg="All banners retrieved successfully",
        failure_msg="Failed to retrieve banners",
    )
