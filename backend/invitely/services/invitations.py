"""
Invitation service: creation, visibility-checked reads, updates, publishing
and cascading deletion.

Publishing has a single code path, publish_invitation(), used both by the
explicit publish call and by payment completion in services.payments.
"""
import logging
from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from invitely.core.exceptions import NotFoundError, ConflictError, InvalidInputError, BusinessRuleError
from invitely.models.user import User, UserStatus
from invitely.models.template import Template
from invitely.models.invitation import Invitation, InvitationStatus
from invitely.models.rsvp import Rsvp
from invitely.models.guestbook import Guestbook
from invitely.models.payment import Payment, PaymentStatus
from invitely.models.visitor import Visitor
from invitely.services.access import resolve_viewer, invitation_visibility, can_view_invitation
from invitely.services.templates import validate_json

logger = logging.getLogger(__name__)

# Children removed before the invitation row itself, in this order
CASCADE_ORDER = (Visitor, Guestbook, Rsvp, Payment)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize to an aware UTC datetime.

    Naive values are taken to be UTC already. The store keeps only the
    wall-clock fields, so every expires_at is written through this first.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(invitation: Invitation, now: Optional[datetime] = None) -> bool:
    if invitation.expires_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    return as_utc(invitation.expires_at) < now


def _slug_taken(db: Session, slug: str, exclude_id: Optional[int] = None) -> bool:
    query = db.query(Invitation.id).filter(Invitation.slug == slug)
    if exclude_id is not None:
        query = query.filter(Invitation.id != exclude_id)
    return query.first() is not None


def _get_invitation_or_404(db: Session, invitation_id: int) -> Invitation:
    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).first()
    if not invitation:
        raise NotFoundError("Invitation not found")
    return invitation


def _apply_published(invitation: Invitation) -> None:
    """Move to published, stamping published_at on the transition."""
    if invitation.status != InvitationStatus.PUBLISHED:
        invitation.status = InvitationStatus.PUBLISHED
        invitation.published_at = datetime.now(timezone.utc)
    elif invitation.published_at is None:
        invitation.published_at = datetime.now(timezone.utc)


def create_invitation(
    db: Session,
    user_id: int,
    template_id: int,
    title: str,
    slug: str,
    wedding_data: str,
    custom_css: Optional[str] = None,
    expires_at: Optional[datetime] = None,
) -> Invitation:
    """
    Create a draft invitation.

    Checks run in order and stop at the first failure: slug, user, user
    status, template, template active flag, wedding_data JSON.
    """
    if _slug_taken(db, slug):
        raise ConflictError(f"Slug '{slug}' is already taken")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    if user.status != UserStatus.ACTIVE:
        raise InvalidInputError("User must be active to create invitations")

    template = db.query(Template).filter(Template.id == template_id).first()
    if not template:
        raise NotFoundError("Template not found")
    if not template.is_active:
        raise InvalidInputError("Template is not active")

    validate_json(wedding_data, "wedding_data")

    invitation = Invitation(
        user_id=user_id,
        template_id=template_id,
        title=title,
        slug=slug,
        status=InvitationStatus.DRAFT,
        wedding_data=wedding_data,
        custom_css=custom_css,
        view_count=0,
        rsvp_count=0,
        expires_at=as_utc(expires_at),
    )
    db.add(invitation)
    db.commit()
    db.refresh(invitation)

    logger.info(f"Created invitation {invitation.id} '{slug}' for user {user_id}")
    return invitation


def check_slug_availability(db: Session, slug: str) -> bool:
    """True when no invitation uses this slug (case-sensitive)."""
    return not _slug_taken(db, slug)


def get_invitations(db: Session, user_id: Optional[int] = None) -> List[Invitation]:
    viewer = resolve_viewer(db, user_id)
    return db.query(Invitation).filter(
        invitation_visibility(viewer)
    ).order_by(Invitation.created_at.desc(), Invitation.id.desc()).all()


def get_invitation_by_slug(db: Session, slug: str) -> Optional[Invitation]:
    """
    Public lookup of a published invitation.

    Each call increments view_count in the store (count = count + 1) and
    returns the post-increment row.
    """
    invitation = db.query(Invitation).filter(
        Invitation.slug == slug,
        Invitation.status == InvitationStatus.PUBLISHED,
    ).first()
    if not invitation:
        return None

    db.query(Invitation).filter(Invitation.id == invitation.id).update(
        {Invitation.view_count: Invitation.view_count + 1},
        synchronize_session=False,
    )
    db.commit()
    db.refresh(invitation)
    return invitation


def get_invitation_by_id(db: Session, invitation_id: int, user_id: Optional[int] = None) -> Optional[Invitation]:
    viewer = resolve_viewer(db, user_id)
    invitation = db.query(Invitation).filter(Invitation.id == invitation_id).first()
    if not invitation or not can_view_invitation(viewer, invitation):
        return None
    return invitation


def update_invitation(db: Session, invitation_id: int, updates: dict) -> Invitation:
    """
    Partially update an invitation.

    Raises:
        NotFoundError: Unknown invitation
        ConflictError: New slug used by another invitation
        InvalidInputError: wedding_data is not valid JSON
    """
    invitation = _get_invitation_or_404(db, invitation_id)

    if updates.get("slug") is not None and updates["slug"] != invitation.slug:
        if _slug_taken(db, updates["slug"], exclude_id=invitation.id):
            raise ConflictError(f"Slug '{updates['slug']}' already exists")
        invitation.slug = updates["slug"]

    if updates.get("wedding_data") is not None:
        validate_json(updates["wedding_data"], "wedding_data")
        invitation.wedding_data = updates["wedding_data"]

    if updates.get("title") is not None:
        invitation.title = updates["title"]

    # Nullable columns accept an explicit None
    if "custom_css" in updates:
        invitation.custom_css = updates["custom_css"]
    if "expires_at" in updates:
        invitation.expires_at = as_utc(updates["expires_at"])

    if updates.get("status") is not None:
        status = InvitationStatus(updates["status"])
        if status == InvitationStatus.PUBLISHED:
            _apply_published(invitation)
        else:
            invitation.status = status

    db.commit()
    db.refresh(invitation)
    logger.info(f"Updated invitation {invitation.id}")
    return invitation


def publish_invitation(db: Session, invitation_id: int, commit: bool = True) -> Invitation:
    """
    Publish an invitation that has a completed payment.

    With commit=False the change is left in the caller's unit of work
    (used by payment processing).

    Raises:
        NotFoundError: Unknown invitation
        BusinessRuleError: No completed payment exists for the invitation
    """
    invitation = _get_invitation_or_404(db, invitation_id)

    paid = db.query(Payment.id).filter(
        Payment.invitation_id == invitation.id,
        Payment.status == PaymentStatus.COMPLETED,
    ).first()
    if not paid:
        raise BusinessRuleError("No completed payment found for this invitation")

    _apply_published(invitation)

    if commit:
        db.commit()
        db.refresh(invitation)
    logger.info(f"Invitation {invitation.id} published")
    return invitation


def delete_invitation(db: Session, invitation_id: int, user_id: int) -> bool:
    """
    Delete an owned invitation and everything attached to it.

    Not-found and not-owner are reported with the same error so non-owners
    cannot probe which ids exist.
    """
    invitation = db.query(Invitation).filter(
        Invitation.id == invitation_id,
        Invitation.user_id == user_id,
    ).first()
    if not invitation:
        raise NotFoundError("Invitation not found or access denied")

    try:
        for model in CASCADE_ORDER:
            deleted = db.query(model).filter(model.invitation_id == invitation.id).delete(synchronize_session=False)
            logger.debug(f"Deleted {deleted} {model.__tablename__} rows for invitation {invitation.id}")
        db.delete(invitation)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete invitation {invitation_id}: {e}")
        raise

    logger.info(f"Invitation {invitation_id} deleted by user {user_id}")
    return True
