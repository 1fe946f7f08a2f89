from fastapi import APIRouter
from .base import router as base_router
from grocery.api.routes import department_module
from grocery.api.routes import category_module
from grocery.api.routes import product_module
from grocery.api.routes import admin_catalog_module

router = APIRouter()

router.include_router(
    base_router,
    prefix="",
    tags=["base"]
)

router.include_router(department_module.router, prefix="/api/departments")
router.include_router(department_module.banner_router, prefix="/api/banners")
router.include_router(category_module.router, prefix="/api/categories")
router.include_router(category_module.subcategory_router, prefix="/api/subcategories")
router.include_router(product_module.router, prefix="/api/products")

#admin routes
router.include_router(admin_catalog_module.router, prefix="/api/admin/catalog")
