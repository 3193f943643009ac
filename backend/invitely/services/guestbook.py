"""
Guestbook service with keyword moderation.
"""
import logging
from typing import List
from sqlalchemy.orm import Session
from invitely.core.exceptions import NotFoundError, AuthorizationError, BusinessRuleError
from invitely.models.invitation import Invitation, InvitationStatus
from invitely.models.guestbook import Guestbook
from invitely.services.masking import get_field_masker
from invitely.services.email import send_guestbook_notification_email

logger = logging.getLogger(__name__)

# Messages containing any of these (case-insensitive substring) are held for moderation
DENYLIST = ("spam", "scam", "fake", "hate")


def passes_content_filter(message: str) -> bool:
    lowered = message.lower()
    return not any(word in lowered for word in DENYLIST)


def create_guestbook(db: Session, invitation_id: int, guest_name: str, message: str) -> Guestbook:
    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).first()
    if not invitation:
        raise NotFoundError("Invitation not found")
    if invitation.status != InvitationStatus.PUBLISHED:
        raise BusinessRuleError("Invitation is not published")

    entry = Guestbook(
        invitation_id=invitation_id,
        guest_name=guest_name,
        message=message,
        is_approved=passes_content_filter(message),
    )
    db.add(entry)
    db.commit()
    db.refresh(entry)

    if entry.is_approved:
        logger.info(f"Guestbook entry {entry.id} added to invitation {invitation_id}")
    else:
        logger.info(f"Guestbook entry {entry.id} on invitation {invitation_id} held for moderation")

    owner_email = get_field_masker().unmask(invitation.owner.email)
    if not send_guestbook_notification_email(owner_email, invitation.title, guest_name, message, entry.is_approved):
        logger.debug(f"Guestbook notification for invitation {invitation_id} not sent")

    return entry


def get_guestbook_entries(db: Session, invitation_id: int, include_unapproved: bool = False) -> List[Guestbook]:
    """Approved entries newest first; include_unapproved lists everything for moderation."""
    query = db.query(Guestbook).filter(Guestbook.invitation_id == invitation_id)
    if not include_unapproved:
        query = query.filter(Guestbook.is_approved.is_(True))
    return query.order_by(Guestbook.created_at.desc(), Guestbook.id.desc()).all()


def _get_owned_entry(db: Session, entry_id: int, user_id: int) -> Guestbook:
    row = db.query(Guestbook, Invitation.user_id).join(
        Invitation, Guestbook.invitation_id == Invitation.id
    ).filter(Guestbook.id == entry_id).first()
    if not row:
        raise NotFoundError("Guestbook entry not found")

    entry, owner_id = row
    if owner_id != user_id:
        raise AuthorizationError("User does not own this invitation")
    return entry


def approve_guestbook_entry(db: Session, entry_id: int, user_id: int) -> Guestbook:
    entry = _get_owned_entry(db, entry_id, user_id)
    entry.is_approved = True
    db.commit()
    db.refresh(entry)
    logger.info(f"Guestbook entry {entry_id} approved by user {user_id}")
    return entry


def delete_guestbook_entry(db: Session, entry_id: int, user_id: int) -> bool:
    entry = _get_owned_entry(db, entry_id, user_id)
    db.delete(entry)
    db.commit()
    logger.info(f"Guestbook entry {entry_id} deleted by user {user_id}")
    return True
