import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from inventory_api.database import Base


class SalesRecord(Base):
    """
    Immutable ledger entry recording a completed sale.

    Attributes:
        id: UUID identifier
        product_id: Sold product (deleted together with it)
        quantity: Units sold
        unit_price: Price per unit
        total_amount: quantity x unit_price
        created_at: Timestamp of the sale
    """
    __tablename__ = "sales_records"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    total_amount = Column(Float, nullable=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

    product = relationship("Product")

    __table_args__ = (
        CheckConstraint("quantity > 0", name="check_sale_quantity_positive"),
        CheckConstraint("unit_price > 0", name="check_sale_unit_price_positive"),
    )

    @property
    def product_name(self):
        return self.product.name if self.product is not None else None

    def __repr__(self):
        return f"<SalesRecord(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
