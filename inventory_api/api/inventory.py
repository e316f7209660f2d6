from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from uuid import UUID

from inventory_api.database import get_db
from inventory_api.models.inventory_transaction import TransactionType
from inventory_api.services.reporting_service import ReportingService
from inventory_api.services.stock_service import StockService
from inventory_api.schemas.common import ApiResponse, Page, to_page
from inventory_api.schemas.inventory import (
    StockInRequest,
    StockOutRequest,
    StockAdjustRequest,
    InventoryTransactionResponse,
)
from inventory_api.tasks.stock_tasks import schedule_low_stock_check

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get(
    "/",
    response_model=ApiResponse[Page[InventoryTransactionResponse]],
    summary="List inventory transactions"
)
def list_transactions(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).list_transactions(page, limit)
    return ApiResponse(data=to_page(result, InventoryTransactionResponse))


@router.get(
    "/type/{transaction_type}",
    response_model=ApiResponse[Page[InventoryTransactionResponse]],
    summary="List inventory transactions by type"
)
def list_transactions_by_type(
    transaction_type: TransactionType,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).transactions_by_type(transaction_type, page, limit)
    return ApiResponse(data=to_page(result, InventoryTransactionResponse))


@router.get(
    "/product/{product_id}",
    response_model=ApiResponse[Page[InventoryTransactionResponse]],
    summary="List inventory transactions of a product"
)
def list_transactions_by_product(
    product_id: UUID,
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(10, ge=1, le=100, description="Items per page"),
    db: Session = Depends(get_db)
):
    result = ReportingService(db).transactions_by_product(str(product_id), page, limit)
    return ApiResponse(data=to_page(result, InventoryTransactionResponse))


@router.post(
    "/stock-in",
    response_model=ApiResponse[InventoryTransactionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Receive stock",
    description="Record an IN movement and add its quantity to the product's stock in one transaction."
)
def stock_in(
    request: StockInRequest,
    db: Session = Depends(get_db)
):
    transaction = StockService(db).stock_in(
        str(request.product_id),
        request.quantity,
        request.unit_price,
        request.reason,
    )
    return ApiResponse(
        data=InventoryTransactionResponse.model_validate(transaction),
        message="Stock-in recorded",
    )


@router.post(
    "/stock-out",
    response_model=ApiResponse[InventoryTransactionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Ship stock",
    description="Record an OUT movement. Fails with 400 if stock would go negative."
)
def stock_out(
    request: StockOutRequest,
    db: Session = Depends(get_db)
):
    product_id = str(request.product_id)
    transaction = StockService(db).stock_out(product_id, request.quantity, request.reason)
    schedule_low_stock_check(product_id)
    return ApiResponse(
        data=InventoryTransactionResponse.model_validate(transaction),
        message="Stock-out recorded",
    )


@router.post(
    "/adjust",
    response_model=ApiResponse[InventoryTransactionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Adjust stock",
    description="Record a signed ADJUST movement. Quantity must be non-zero and a reason is required."
)
def adjust_stock(
    request: StockAdjustRequest,
    db: Session = Depends(get_db)
):
    product_id = str(request.product_id)
    transaction = StockService(db).adjust_stock(product_id, request.quantity, request.reason)
    if request.quantity < 0:
        schedule_low_stock_check(product_id)
    return ApiResponse(
        data=InventoryTransactionResponse.model_validate(transaction),
        message="Stock adjusted",
    )


@router.delete(
    "/{transaction_id}",
    response_model=ApiResponse,
    summary="Delete an inventory transaction",
    description="Removes the history row only; the product's stock is not reversed."
)
def delete_transaction(
    transaction_id: UUID,
    db: Session = Depends(get_db)
):
    StockService(db).delete_transaction(str(transaction_id))
    return ApiResponse(message="Inventory transaction deleted")
