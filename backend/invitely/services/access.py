"""
Invitation visibility policy.

Every invitation read path goes through these helpers:
- no viewer: published invitations only (public gallery)
- super_admin: everything
- user_mitra / user_customer: their own invitations only
"""
from typing import Optional
from sqlalchemy import true
from sqlalchemy.orm import Session
from invitely.core.exceptions import NotFoundError
from invitely.models.user import User
from invitely.models.invitation import Invitation, InvitationStatus


def resolve_viewer(db: Session, user_id: Optional[int]) -> Optional[User]:
    """Load the calling user, or None for anonymous access."""
    if user_id is None:
        return None

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def invitation_visibility(viewer: Optional[User]):
    """SQL criterion selecting the invitations a viewer may see."""
    if viewer is None:
        return Invitation.status == InvitationStatus.PUBLISHED
    if viewer.is_super_admin():
        return true()
    return Invitation.user_id == viewer.id


def can_view_invitation(viewer: Optional[User], invitation: Invitation) -> bool:
    """In-memory counterpart of invitation_visibility()."""
    if viewer is None:
        return invitation.status == InvitationStatus.PUBLISHED
    return can_manage_invitation(viewer, invitation)


def can_manage_invitation(viewer: Optional[User], invitation: Invitation) -> bool:
    """Owner or super_admin."""
    if viewer is None:
        return False
    return viewer.is_super_admin() or invitation.user_id == viewer.id
