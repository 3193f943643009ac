"""
Payment model. Publishing an invitation is gated on a completed payment.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, Numeric, ForeignKey, Enum as SQLEnum
from sqlalchemy.sql import func
import enum
from invitely.core.database import Base


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    invitation_id = Column(Integer, ForeignKey("invitations.id"), nullable=False, index=True)
    amount = Column(Numeric(10, 2), nullable=False)
    currency = Column(String(10), nullable=False)
    payment_method = Column(String(50), nullable=False)
    status = Column(
        SQLEnum(PaymentStatus, name="payment_status", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    transaction_id = Column(String(64), nullable=True, index=True)
    payment_data = Column(Text, nullable=True)  # Raw gateway response as JSON
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
