from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional

from inventory_api.models.product import ProductCategory


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    category: ProductCategory = Field(..., description="Product category")
    description: Optional[str] = Field(None, max_length=1000, description="Product description")
    unit: str = Field(..., min_length=1, max_length=20, description="Unit label, e.g. piece or box")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Selling price (non-negative)")
    cost: float = Field(..., ge=0, allow_inf_nan=False, description="Purchase cost (non-negative)")
    min_stock: int = Field(0, ge=0, description="Low-stock threshold")


class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    stock: int = Field(0, ge=0, description="Initial stock (must be non-negative)")


class ProductUpdate(BaseModel):
    """
    Schema for updating an existing product. All fields are optional.

    Stock is deliberately absent: it only changes through stock movements and sales.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[ProductCategory] = None
    description: Optional[str] = Field(None, max_length=1000)
    unit: Optional[str] = Field(None, min_length=1, max_length=20)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    cost: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    min_stock: Optional[int] = Field(None, ge=0)

    model_config = ConfigDict(extra="forbid")


class ProductResponse(ProductBase):
    """Schema for product response including all fields."""
    id: str
    stock: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductStats(BaseModel):
    """Aggregate figures over the whole catalog."""
    total_products: int
    low_stock_products: int
    total_value: float
