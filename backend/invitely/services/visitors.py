"""
Visitor logging service.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from invitely.core.exceptions import NotFoundError
from invitely.models.invitation import Invitation
from invitely.models.visitor import Visitor
from invitely.services.masking import get_field_masker, truncate_utf8

logger = logging.getLogger(__name__)

# Byte limits applied before masking so the token fits the visitors columns
IP_ADDRESS_MAX_BYTES = 64
USER_AGENT_MAX_BYTES = 512


@dataclass
class VisitorRecord:
    """Logged visit with the caller's own (unmasked) ip and user agent."""
    id: int
    invitation_id: int
    ip_address: str
    user_agent: str
    referrer: Optional[str]
    visited_at: datetime


def log_visitor(
    db: Session,
    invitation_id: int,
    ip_address: str,
    user_agent: str,
    referrer: Optional[str] = None,
) -> VisitorRecord:
    """
    Store a visit and bump the invitation's view_count in one transaction.

    The ip address is masked deterministically so distinct visitors can still
    be counted in the store.
    """
    if not db.query(Invitation.id).filter(Invitation.id == invitation_id).first():
        raise NotFoundError(f"Invitation with id {invitation_id} not found")

    masker = get_field_masker()
    visitor = Visitor(
        invitation_id=invitation_id,
        ip_address=masker.mask(truncate_utf8(ip_address, IP_ADDRESS_MAX_BYTES), deterministic=True),
        user_agent=masker.mask(truncate_utf8(user_agent, USER_AGENT_MAX_BYTES)),
        referrer=referrer or None,
    )

    try:
        db.add(visitor)
        db.query(Invitation).filter(Invitation.id == invitation_id).update(
            {Invitation.view_count: Invitation.view_count + 1},
            synchronize_session=False,
        )
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to log visitor for invitation {invitation_id}: {e}")
        raise

    db.refresh(visitor)
    return VisitorRecord(
        id=visitor.id,
        invitation_id=visitor.invitation_id,
        ip_address=ip_address,
        user_agent=user_agent,
        referrer=visitor.referrer,
        visited_at=visitor.visited_at,
    )
