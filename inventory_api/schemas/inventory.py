from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional
from uuid import UUID

from inventory_api.models.inventory_transaction import TransactionType


class StockInRequest(BaseModel):
    """Schema for receiving goods into stock."""
    product_id: UUID = Field(..., description="ID of the product being restocked")
    quantity: int = Field(..., ge=1, description="Units received")
    unit_price: float = Field(..., ge=0, allow_inf_nan=False, description="Purchase price per unit")
    reason: Optional[str] = Field(None, max_length=500, description="Defaults to 'restock'")


class StockOutRequest(BaseModel):
    """Schema for shipping goods out of stock."""
    product_id: UUID = Field(..., description="ID of the product being shipped")
    quantity: int = Field(..., ge=1, description="Units shipped")
    reason: Optional[str] = Field(None, max_length=500, description="Defaults to 'shipment'")


class StockAdjustRequest(BaseModel):
    """Schema for a signed stock correction; zero is rejected by the service."""
    product_id: UUID = Field(..., description="ID of the product being corrected")
    quantity: int = Field(..., description="Signed correction, e.g. -4 for breakage")
    reason: str = Field(..., max_length=500, description="Why the stock is corrected")


class InventoryTransactionResponse(BaseModel):
    """Schema for an inventory transaction."""
    id: str
    product_id: str
    product_name: Optional[str] = None
    type: TransactionType
    quantity: int
    unit_price: Optional[float] = None
    total_amount: Optional[float] = None
    reason: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
