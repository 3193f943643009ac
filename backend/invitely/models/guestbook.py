"""
Guestbook model. Moderated public messages attached to an invitation.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.sql import func
from invitely.core.database import Base


class Guestbook(Base):
    __tablename__ = "guestbooks"

    id = Column(Integer, primary_key=True, index=True)
    invitation_id = Column(Integer, ForeignKey("invitations.id"), nullable=False, index=True)
    guest_name = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
