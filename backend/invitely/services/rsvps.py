"""
RSVP service.
"""
import logging
from typing import Optional, List
from sqlalchemy import func, or_, case
from sqlalchemy.orm import Session
from invitely.core.exceptions import NotFoundError, ConflictError, BusinessRuleError
from invitely.models.invitation import Invitation, InvitationStatus
from invitely.models.rsvp import Rsvp, RsvpStatus
from invitely.services.access import resolve_viewer, can_manage_invitation
from invitely.services.invitations import is_expired

logger = logging.getLogger(__name__)


def create_rsvp(
    db: Session,
    invitation_id: int,
    guest_name: str,
    status: RsvpStatus,
    guest_count: int,
    guest_email: Optional[str] = None,
    guest_phone: Optional[str] = None,
    message: Optional[str] = None,
) -> Rsvp:
    """
    Record a guest response on a published, unexpired invitation.

    A guest counts as a duplicate on the same invitation when the name, the
    email (if given) or the phone (if given) matches an existing RSVP.
    """
    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).first()
    if not invitation:
        raise NotFoundError("Invitation not found")
    if invitation.status != InvitationStatus.PUBLISHED:
        raise BusinessRuleError("Invitation is not published")
    if is_expired(invitation):
        raise BusinessRuleError("Invitation has expired")

    identity = [Rsvp.guest_name == guest_name]
    if guest_email:
        identity.append(Rsvp.guest_email == guest_email)
    if guest_phone:
        identity.append(Rsvp.guest_phone == guest_phone)

    duplicate = db.query(Rsvp.id).filter(
        Rsvp.invitation_id == invitation_id,
        or_(*identity),
    ).first()
    if duplicate:
        raise ConflictError("Guest has already responded to this invitation")

    rsvp = Rsvp(
        invitation_id=invitation_id,
        guest_name=guest_name,
        guest_email=guest_email,
        guest_phone=guest_phone,
        status=RsvpStatus(status),
        guest_count=guest_count,
        message=message,
    )
    db.add(rsvp)
    db.query(Invitation).filter(Invitation.id == invitation_id).update(
        {Invitation.rsvp_count: Invitation.rsvp_count + 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(rsvp)

    logger.info(f"RSVP {rsvp.id} ({rsvp.status.value}) recorded for invitation {invitation_id}")
    return rsvp


def get_rsvps_by_invitation(db: Session, invitation_id: int, user_id: int) -> List[Rsvp]:
    """
    Guest list for the invitation owner or a super admin.

    Raises:
        NotFoundError: Unknown user, or the invitation is missing or not
            manageable by the caller (same message either way)
    """
    viewer = resolve_viewer(db, user_id)
    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).first()
    if not invitation or not can_manage_invitation(viewer, invitation):
        raise NotFoundError("Invitation not found or access denied")

    return db.query(Rsvp).filter(
        Rsvp.invitation_id == invitation_id
    ).order_by(Rsvp.created_at.desc(), Rsvp.id.desc()).all()


def get_rsvp_stats(db: Session, invitation_id: int) -> dict:
    """Response counts per status and total expected guests."""
    row = db.query(
        func.count(Rsvp.id),
        func.sum(case((Rsvp.status == RsvpStatus.ATTENDING, 1), else_=0)),
        func.sum(case((Rsvp.status == RsvpStatus.NOT_ATTENDING, 1), else_=0)),
        func.sum(case((Rsvp.status == RsvpStatus.MAYBE, 1), else_=0)),
        func.sum(Rsvp.guest_count),
    ).filter(Rsvp.invitation_id == invitation_id).one()

    total, attending, not_attending, maybe, total_guests = row
    return {
        "total": total or 0,
        "attending": int(attending or 0),
        "not_attending": int(not_attending or 0),
        "maybe": int(maybe or 0),
        "total_guests": int(total_guests or 0),
    }
