from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional
from uuid import UUID


class SaleCreate(BaseModel):
    """Schema for recording a sale."""
    product_id: UUID = Field(..., description="ID of the product sold")
    quantity: int = Field(..., ge=1, description="Units sold")
    unit_price: float = Field(..., gt=0, allow_inf_nan=False, description="Selling price per unit")


class SalesRecordResponse(BaseModel):
    """Schema for a sales record."""
    id: str
    product_id: str
    product_name: Optional[str] = None
    quantity: int
    unit_price: float
    total_amount: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SalesStats(BaseModel):
    """Lifetime and today's sales figures."""
    total_sales: int
    total_revenue: float
    today_sales: int
    today_revenue: float
