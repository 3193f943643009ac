"""
RSVP model. A guest's attendance response to an invitation.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.sql import func
import enum
from invitely.core.database import Base


class RsvpStatus(str, enum.Enum):
    ATTENDING = "attending"
    NOT_ATTENDING = "not_attending"
    MAYBE = "maybe"


class Rsvp(Base):
    __tablename__ = "rsvps"

    id = Column(Integer, primary_key=True, index=True)
    invitation_id = Column(Integer, ForeignKey("invitations.id"), nullable=False, index=True)
    guest_name = Column(String(255), nullable=False)
    guest_email = Column(String(255), nullable=True)
    guest_phone = Column(String(50), nullable=True)
    status = Column(SQLEnum(RsvpStatus, name="rsvp_status", values_callable=lambda x: [e.value for e in x]), nullable=False)
    guest_count = Column(Integer, nullable=False)
    message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
