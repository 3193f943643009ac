"""
Payment procedures.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from typing import Optional, List, Any
from datetime import datetime
from decimal import Decimal
from invitely.core.database import get_db
from invitely.models.payment import PaymentStatus
from invitely.services import payments as payment_service

router = APIRouter()


class CreatePaymentRequest(BaseModel):
    user_id: int
    invitation_id: int
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    currency: str = Field(..., min_length=3, max_length=10)
    payment_method: str = Field(..., min_length=1, max_length=50)


class ProcessPaymentRequest(BaseModel):
    payment_id: int = Field(..., alias="paymentId")
    gateway_response: Any = Field(..., alias="gatewayResponse")  # Opaque, stored verbatim

    class Config:
        populate_by_name = True


class PaymentResponse(BaseModel):
    id: int
    user_id: int
    invitation_id: int
    amount: float
    currency: str
    payment_method: str
    status: PaymentStatus
    transaction_id: Optional[str]
    payment_data: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.post("/createPayment", response_model=PaymentResponse)
async def create_payment(request: CreatePaymentRequest, db: Session = Depends(get_db)):
    return payment_service.create_payment(
        db,
        user_id=request.user_id,
        invitation_id=request.invitation_id,
        amount=request.amount,
        currency=request.currency,
        payment_method=request.payment_method,
    )


@router.post("/processPayment", response_model=PaymentResponse)
async def process_payment(request: ProcessPaymentRequest, db: Session = Depends(get_db)):
    """Simulated gateway callback; a successful payment publishes the invitation."""
    return payment_service.process_payment(db, request.payment_id, request.gateway_response)


@router.get("/getPaymentsByUser", response_model=List[PaymentResponse])
async def get_payments_by_user(user_id: int = Query(..., alias="userId"), db: Session = Depends(get_db)):
    return payment_service.get_payments_by_user(db, user_id)
