import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Enum, CheckConstraint

from inventory_api.database import Base


class ProductCategory(str, enum.Enum):
    """Closed set of product categories."""
    PEN = "pen"
    PAPER = "paper"
    OFFICE = "office"
    OTHER = "other"


class Product(Base):
    """
    Product model representing a sellable item.

    Attributes:
        id: UUID identifier, immutable
        name: Product name
        category: One of ProductCategory
        description: Optional free text
        unit: Unit label (piece, box, pack, ...)
        price: Selling price (non-negative)
        cost: Purchase cost (non-negative)
        stock: Current quantity on hand, only changed through the ledger
        min_stock: Low-stock threshold
        created_at: Timestamp when product was created
        updated_at: Timestamp when product was last updated
    """
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    category = Column(
        Enum(
            ProductCategory,
            name="product_category",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        index=True,
    )
    description = Column(Text, nullable=True)
    unit = Column(String(20), nullable=False)
    price = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    # Database-level constraints; stock >= 0 backs up the conditional updates
    __table_args__ = (
        CheckConstraint("price >= 0", name="check_price_non_negative"),
        CheckConstraint("cost >= 0", name="check_cost_non_negative"),
        CheckConstraint("stock >= 0", name="check_stock_non_negative"),
        CheckConstraint("min_stock >= 0", name="check_min_stock_non_negative"),
    )

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock})>"
