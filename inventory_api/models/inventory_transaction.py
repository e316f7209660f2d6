import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship

from inventory_api.database import Base


class TransactionType(str, enum.Enum):
    """Kinds of stock movement."""
    IN = "in"
    OUT = "out"
    ADJUST = "adjust"


# Reason written on the OUT row that mirrors a sale
SALE_REASON = "sale"


def stock_delta(transaction_type: TransactionType, quantity: int) -> int:
    """Signed change a movement applies to product stock."""
    if transaction_type == TransactionType.OUT:
        return -quantity
    # IN is positive; ADJUST carries its own sign
    return quantity


class InventoryTransaction(Base):
    """
    Immutable ledger entry recording one stock movement.

    Attributes:
        id: UUID identifier
        product_id: Owning product (deleted together with it)
        type: in / out / adjust
        quantity: Positive for in/out, signed non-zero for adjust
        unit_price: Optional unit price
        total_amount: quantity x unit_price when a price was given
        reason: Optional free text
        created_at: Timestamp of the movement
    """
    __tablename__ = "inventory_transactions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_id = Column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(
        Enum(
            TransactionType,
            name="transaction_type",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
        index=True,
    )
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=True)
    total_amount = Column(Float, nullable=True)
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)

    # Read-side enrichment only
    product = relationship("Product")

    @property
    def product_name(self):
        return self.product.name if self.product is not None else None

    def __repr__(self):
        return (
            f"<InventoryTransaction(id={self.id}, product_id={self.product_id}, "
            f"type='{self.type}', quantity={self.quantity})>"
        )
