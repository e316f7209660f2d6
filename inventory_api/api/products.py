from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from uuid import UUID

from inventory_api.database import get_db
from inventory_api.models.product import ProductCategory
from inventory_api.services.product_service import ProductService
from inventory_api.services.reporting_service import ReportingService
from inventory_api.schemas.common import ApiResponse, Page, to_page
from inventory_api.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductStats,
)

router = APIRouter(prefix="/products", tags=["Products"])


@router.get(
    "/",
    response_model=ApiResponse[Page[ProductResponse]],
    summary="List all products",
    description="Get a paginated list of products, newest first."
)
def list_products(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).list_products(page, limit)
    return ApiResponse(data=to_page(result, ProductResponse))


@router.get(
    "/stats",
    response_model=ApiResponse[ProductStats],
    summary="Product statistics",
    description="Total products, low-stock count and inventory value (stock x cost)."
)
def get_product_stats(db: Session = Depends(get_db)):
    return ApiResponse(data=ReportingService(db).product_stats())


@router.get(
    "/low-stock",
    response_model=ApiResponse[list[ProductResponse]],
    summary="Low-stock products",
    description="Products whose stock is at or below their minimum, lowest stock first."
)
def get_low_stock_products(db: Session = Depends(get_db)):
    products = ReportingService(db).low_stock_products()
    return ApiResponse(data=[ProductResponse.model_validate(p) for p in products])


@router.get(
    "/search",
    response_model=ApiResponse[Page[ProductResponse]],
    summary="Search products",
    description="Case-insensitive keyword match over product name and description."
)
def search_products(
    keyword: str = Query(..., description="Search keyword"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).search_products(keyword, page, limit)
    return ApiResponse(data=to_page(result, ProductResponse))


@router.get(
    "/category/{category}",
    response_model=ApiResponse[Page[ProductResponse]],
    summary="List products by category"
)
def list_products_by_category(
    category: ProductCategory,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).list_products_by_category(category, page, limit)
    return ApiResponse(data=to_page(result, ProductResponse))


@router.get(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    summary="Get product by ID",
    description="Get a single product. Results are cached in Redis and invalidated on every change."
)
def get_product(
    product_id: UUID,
    db: Session = Depends(get_db)
):
    return ApiResponse(data=ProductService(db).get_product_cached(str(product_id)))


@router.post(
    "/",
    response_model=ApiResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product"
)
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new product.

    - **stock**: initial quantity on hand; afterwards stock only changes
      through stock movements and sales
    """
    product = ProductService(db).create_product(product_data)
    return ApiResponse(data=ProductResponse.model_validate(product), message="Product created")


@router.put(
    "/{product_id}",
    response_model=ApiResponse[ProductResponse],
    summary="Update a product",
    description="Partial update of catalog fields. Stock cannot be set here."
)
def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    db: Session = Depends(get_db)
):
    product = ProductService(db).update_product(str(product_id), product_data)
    return ApiResponse(data=ProductResponse.model_validate(product), message="Product updated")


@router.delete(
    "/{product_id}",
    response_model=ApiResponse,
    summary="Delete a product",
    description="Delete a product together with its inventory and sales history."
)
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db)
):
    ProductService(db).delete_product(str(product_id))
    return ApiResponse(message="Product deleted")
