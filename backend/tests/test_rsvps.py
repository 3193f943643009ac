from datetime import datetime, timedelta, timezone
import pytest
from invitely.core.exceptions import NotFoundError, ConflictError, BusinessRuleError
from invitely.models.user import UserRole
from invitely.models.rsvp import RsvpStatus
from invitely.services import rsvps as rsvp_service
from invitely.services.invitations import update_invitation


def test_rsvp_requires_published_invitation(db, make_invitation):
    draft = make_invitation()

    with pytest.raises(BusinessRuleError, match="Invitation is not published"):
        rsvp_service.create_rsvp(db, draft.id, "Andi", RsvpStatus.ATTENDING, 1)
    with pytest.raises(NotFoundError, match="Invitation not found"):
        rsvp_service.create_rsvp(db, 9999, "Andi", RsvpStatus.ATTENDING, 1)


def test_rsvp_rejected_after_expiry(db, make_published_invitation):
    invitation = make_published_invitation(expires_at=datetime.now(timezone.utc) - timedelta(days=1))

    with pytest.raises(BusinessRuleError, match="Invitation has expired"):
        rsvp_service.create_rsvp(db, invitation.id, "Andi", RsvpStatus.ATTENDING, 1)


def test_expiry_with_utc_offset_is_honoured(db, make_published_invitation):
    west = timezone(timedelta(hours=-5))
    east = timezone(timedelta(hours=7))
    live = make_published_invitation(expires_at=(datetime.now(timezone.utc) + timedelta(hours=3)).astimezone(west))
    lapsed = make_published_invitation(expires_at=(datetime.now(timezone.utc) - timedelta(hours=1)).astimezone(east))

    rsvp_service.create_rsvp(db, live.id, "Andi", RsvpStatus.ATTENDING, 1)
    with pytest.raises(BusinessRuleError, match="Invitation has expired"):
        rsvp_service.create_rsvp(db, lapsed.id, "Andi", RsvpStatus.ATTENDING, 1)


def test_expiry_set_by_update_with_utc_offset(db, make_published_invitation):
    invitation = make_published_invitation()
    west = timezone(timedelta(hours=-8))
    soon = (datetime.now(timezone.utc) + timedelta(hours=2)).astimezone(west)

    update_invitation(db, invitation.id, {"expires_at": soon})

    rsvp_service.create_rsvp(db, invitation.id, "Andi", RsvpStatus.ATTENDING, 1)


def test_rsvp_increments_counter(db, make_published_invitation):
    invitation = make_published_invitation(expires_at=datetime.now(timezone.utc) + timedelta(days=30))

    rsvp = rsvp_service.create_rsvp(
        db, invitation.id, "Andi", RsvpStatus.ATTENDING, 2,
        guest_email="andi@example.com", message="See you there",
    )
    rsvp_service.create_rsvp(db, invitation.id, "Rina", RsvpStatus.MAYBE, 1)

    assert rsvp.status == RsvpStatus.ATTENDING
    db.refresh(invitation)
    assert invitation.rsvp_count == 2


@pytest.mark.parametrize("kwargs", [
    {"guest_name": "Andi"},
    {"guest_name": "Andi Saputra", "guest_email": "andi@example.com"},
    {"guest_name": "A. Saputra", "guest_phone": "0811"},
])
def test_duplicate_guest_rejected(db, make_published_invitation, kwargs):
    invitation = make_published_invitation()
    rsvp_service.create_rsvp(
        db, invitation.id, "Andi", RsvpStatus.ATTENDING, 1,
        guest_email="andi@example.com", guest_phone="0811",
    )

    with pytest.raises(ConflictError, match="already responded"):
        rsvp_service.create_rsvp(db, invitation.id, status=RsvpStatus.MAYBE, guest_count=1, **kwargs)

    db.refresh(invitation)
    assert invitation.rsvp_count == 1


def test_same_guest_on_different_invitations(db, make_published_invitation):
    first = make_published_invitation()
    second = make_published_invitation()

    rsvp_service.create_rsvp(db, first.id, "Andi", RsvpStatus.ATTENDING, 1, guest_email="andi@example.com")
    rsvp_service.create_rsvp(db, second.id, "Andi", RsvpStatus.ATTENDING, 1, guest_email="andi@example.com")


def test_guest_list_restricted_to_owner_and_admin(db, make_user, make_published_invitation):
    owner = make_user()
    admin = make_user(role=UserRole.SUPER_ADMIN)
    stranger = make_user()
    invitation = make_published_invitation(user=owner)
    rsvp_service.create_rsvp(db, invitation.id, "Andi", RsvpStatus.ATTENDING, 1)
    rsvp_service.create_rsvp(db, invitation.id, "Rina", RsvpStatus.NOT_ATTENDING, 1)

    names = [r.guest_name for r in rsvp_service.get_rsvps_by_invitation(db, invitation.id, owner.id)]
    assert names == ["Rina", "Andi"]
    assert len(rsvp_service.get_rsvps_by_invitation(db, invitation.id, admin.id)) == 2

    with pytest.raises(NotFoundError, match="access denied"):
        rsvp_service.get_rsvps_by_invitation(db, invitation.id, stranger.id)
    with pytest.raises(NotFoundError, match="access denied"):
        rsvp_service.get_rsvps_by_invitation(db, 9999, owner.id)


def test_rsvp_stats(db, make_published_invitation):
    invitation = make_published_invitation()
    rsvp_service.create_rsvp(db, invitation.id, "Andi", RsvpStatus.ATTENDING, 2)
    rsvp_service.create_rsvp(db, invitation.id, "Rina", RsvpStatus.ATTENDING, 3)
    rsvp_service.create_rsvp(db, invitation.id, "Dewi", RsvpStatus.NOT_ATTENDING, 1)
    rsvp_service.create_rsvp(db, invitation.id, "Joko", RsvpStatus.MAYBE, 1)

    assert rsvp_service.get_rsvp_stats(db, invitation.id) == {
        "total": 4,
        "attending": 2,
        "not_attending": 1,
        "maybe": 1,
        "total_guests": 7,
    }


def test_rsvp_stats_empty(db, make_published_invitation):
    invitation = make_published_invitation()
    assert rsvp_service.get_rsvp_stats(db, invitation.id) == {
        "total": 0,
        "attending": 0,
        "not_attending": 0,
        "maybe": 0,
        "total_guests": 0,
    }
