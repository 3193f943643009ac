"""
Payment service with a simulated gateway callback.
"""
import json
import logging
import secrets
from decimal import Decimal
from typing import Any, List
from sqlalchemy.orm import Session
from invitely.core.exceptions import NotFoundError, AuthorizationError
from invitely.models.user import User
from invitely.models.invitation import Invitation
from invitely.models.payment import Payment, PaymentStatus
from invitely.services.invitations import publish_invitation

logger = logging.getLogger(__name__)

TRANSACTION_PREFIX = "TXN_"


def generate_transaction_id() -> str:
    """Random token with a readable prefix, e.g. TXN_9F2C4A1B7E3D5C60."""
    return f"{TRANSACTION_PREFIX}{secrets.token_hex(8).upper()}"


def create_payment(
    db: Session,
    user_id: int,
    invitation_id: int,
    amount: Decimal,
    currency: str,
    payment_method: str,
) -> Payment:
    """
    Open a pending payment for an invitation owned by the user.

    Raises:
        NotFoundError: Unknown user or invitation
        AuthorizationError: Invitation belongs to another user
    """
    if not db.query(User.id).filter(User.id == user_id).first():
        raise NotFoundError("User not found")

    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).first()
    if not invitation:
        raise NotFoundError("Invitation not found")
    if invitation.user_id != user_id:
        raise AuthorizationError("Invitation does not belong to the specified user")

    payment = Payment(
        user_id=user_id,
        invitation_id=invitation_id,
        amount=Decimal(str(amount)),
        currency=currency,
        payment_method=payment_method,
        status=PaymentStatus.PENDING,
        transaction_id=generate_transaction_id(),
        payment_data=None,
    )
    db.add(payment)
    db.commit()
    db.refresh(payment)

    logger.info(f"Payment {payment.id} ({payment.transaction_id}) opened for invitation {invitation_id}")
    return payment


def process_payment(db: Session, payment_id: int, gateway_response: Any) -> Payment:
    """
    Apply the gateway callback.

    A truthy `success` completes the payment and publishes the invitation in
    the same commit; anything else marks it failed and leaves the invitation
    alone. The raw response is stored for audit.
    """
    payment = db.query(Payment).filter(Payment.id == payment_id).first()
    if not payment:
        raise NotFoundError("Payment not found")

    succeeded = isinstance(gateway_response, dict) and bool(gateway_response.get("success"))

    payment.status = PaymentStatus.COMPLETED if succeeded else PaymentStatus.FAILED
    payment.payment_data = json.dumps(gateway_response, default=str)

    if succeeded:
        # Make the completed payment visible to the publish check
        db.flush()
        publish_invitation(db, payment.invitation_id, commit=False)

    db.commit()
    db.refresh(payment)

    logger.info(f"Payment {payment.id} {payment.status.value}")
    return payment


def get_payments_by_user(db: Session, user_id: int) -> List[Payment]:
    return db.query(Payment).filter(
        Payment.user_id == user_id
    ).order_by(Payment.created_at.desc(), Payment.id.desc()).all()
