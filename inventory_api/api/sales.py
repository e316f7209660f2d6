from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from uuid import UUID

from inventory_api.database import get_db
from inventory_api.services.reporting_service import ReportingService
from inventory_api.services.stock_service import StockService
from inventory_api.schemas.common import ApiResponse, Page, to_page
from inventory_api.schemas.sales import SaleCreate, SalesRecordResponse, SalesStats
from inventory_api.tasks.stock_tasks import schedule_low_stock_check

router = APIRouter(prefix="/sales", tags=["Sales"])


@router.get(
    "/",
    response_model=ApiResponse[Page[SalesRecordResponse]],
    summary="List sales"
)
def list_sales(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).list_sales(page, limit)
    return ApiResponse(data=to_page(result, SalesRecordResponse))


@router.get(
    "/stats",
    response_model=ApiResponse[SalesStats],
    summary="Sales statistics",
    description="Lifetime and today's (local midnight to midnight) sale count and revenue."
)
def get_sales_stats(db: Session = Depends(get_db)):
    return ApiResponse(data=ReportingService(db).sales_stats())


@router.get(
    "/date-range",
    response_model=ApiResponse[Page[SalesRecordResponse]],
    summary="List sales in a date range",
    description="Both bounds are inclusive; start_date must be before end_date."
)
def list_sales_by_date_range(
    start_date: datetime = Query(..., description="Range start (ISO 8601)"),
    end_date: datetime = Query(..., description="Range end (ISO 8601)"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).sales_by_date_range(start_date, end_date, page, limit)
    return ApiResponse(data=to_page(result, SalesRecordResponse))


@router.get(
    "/product/{product_id}",
    response_model=ApiResponse[Page[SalesRecordResponse]],
    summary="List sales of a product"
)
def list_sales_by_product(
    product_id: UUID,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).sales_by_product(str(product_id), page, limit)
    return ApiResponse(data=to_page(result, SalesRecordResponse))


@router.post(
    "/",
    response_model=ApiResponse[SalesRecordResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Record a sale",
    description="""
    Record a sale of a product.

    The stock check, the stock decrement, the sales record and the mirrored
    OUT inventory transaction are committed together. When two sales race
    for the last units, the product row lock makes the second one see the
    reduced stock and fail with 400 'Insufficient stock'.
    """
)
def create_sale(
    sale_data: SaleCreate,
    db: Session = Depends(get_db)
):
    product_id = str(sale_data.product_id)
    sale = StockService(db).record_sale(product_id, sale_data.quantity, sale_data.unit_price)
    schedule_low_stock_check(product_id)
    return ApiResponse(data=SalesRecordResponse.model_validate(sale), message="Sale recorded")


@router.delete(
    "/{sale_id}",
    response_model=ApiResponse,
    summary="Delete a sale",
    description="Removes the sales record only; stock and the mirrored transaction stay as they are."
)
def delete_sale(
    sale_id: UUID,
    db: Session = Depends(get_db)
):
    StockService(db).delete_sale(str(sale_id))
    return ApiResponse(message="Sales record deleted")
