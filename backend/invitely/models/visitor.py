"""
Visitor model. Append-only page views of an invitation.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from invitely.core.database import Base


class Visitor(Base):
    __tablename__ = "visitors"

    id = Column(Integer, primary_key=True, index=True)
    invitation_id = Column(Integer, ForeignKey("invitations.id"), nullable=False, index=True)
    ip_address = Column(String(512), nullable=False)  # Masked at rest (deterministic, for distinct counts)
    user_agent = Column(String(1024), nullable=False)  # Masked at rest
    referrer = Column(String(1024), nullable=True)
    visited_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
