import json
import re
from decimal import Decimal
import pytest
from invitely.core.exceptions import NotFoundError, AuthorizationError
from invitely.models.invitation import InvitationStatus
from invitely.models.payment import PaymentStatus
from invitely.services import payments as payment_service


def test_transaction_ids_are_prefixed_and_unique():
    ids = {payment_service.generate_transaction_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(re.fullmatch(r"TXN_[0-9A-F]{16}", i) for i in ids)


def test_create_payment_opens_pending(db, make_invitation):
    invitation = make_invitation()

    payment = payment_service.create_payment(db, invitation.user_id, invitation.id, Decimal("150000.00"), "IDR", "bank_transfer")

    assert payment.status == PaymentStatus.PENDING
    assert payment.amount == Decimal("150000.00")
    assert payment.payment_data is None
    assert payment.transaction_id.startswith("TXN_")


def test_create_payment_checks_references(db, make_user, make_invitation):
    invitation = make_invitation()
    stranger = make_user()

    with pytest.raises(NotFoundError, match="User not found"):
        payment_service.create_payment(db, 9999, invitation.id, 100, "IDR", "card")
    with pytest.raises(NotFoundError, match="Invitation not found"):
        payment_service.create_payment(db, stranger.id, 9999, 100, "IDR", "card")
    with pytest.raises(AuthorizationError):
        payment_service.create_payment(db, stranger.id, invitation.id, 100, "IDR", "card")


def test_successful_payment_publishes_invitation(db, make_invitation):
    invitation = make_invitation()
    payment = payment_service.create_payment(db, invitation.user_id, invitation.id, 100, "IDR", "card")

    processed = payment_service.process_payment(db, payment.id, {"success": True, "reference": "GW-42"})

    assert processed.status == PaymentStatus.COMPLETED
    assert json.loads(processed.payment_data) == {"success": True, "reference": "GW-42"}
    db.refresh(invitation)
    assert invitation.status == InvitationStatus.PUBLISHED
    assert invitation.published_at is not None


@pytest.mark.parametrize("response", [
    {"success": False, "error": "card declined"},
    {"reference": "no-flag"},
    "garbage",
])
def test_failed_payment_leaves_invitation_draft(db, make_invitation, response):
    invitation = make_invitation()
    payment = payment_service.create_payment(db, invitation.user_id, invitation.id, 100, "IDR", "card")

    processed = payment_service.process_payment(db, payment.id, response)

    assert processed.status == PaymentStatus.FAILED
    assert json.loads(processed.payment_data) == response
    db.refresh(invitation)
    assert invitation.status == InvitationStatus.DRAFT


def test_process_unknown_payment(db):
    with pytest.raises(NotFoundError, match="Payment not found"):
        payment_service.process_payment(db, 9999, {"success": True})


def test_payments_by_user_newest_first(db, make_user, make_invitation):
    owner = make_user()
    invitation = make_invitation(user=owner)
    first = payment_service.create_payment(db, owner.id, invitation.id, 100, "IDR", "card")
    second = payment_service.create_payment(db, owner.id, invitation.id, 200, "IDR", "card")

    assert [p.id for p in payment_service.get_payments_by_user(db, owner.id)] == [second.id, first.id]
    assert payment_service.get_payments_by_user(db, make_user().id) == []
