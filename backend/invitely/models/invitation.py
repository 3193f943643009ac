"""
Invitation model. One published wedding page per row, addressed by slug.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from invitely.core.database import Base


class InvitationStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"
    ARCHIVED = "archived"


class Invitation(Base):
    __tablename__ = "invitations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("templates.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)  # Case-sensitive
    status = Column(
        SQLEnum(InvitationStatus, name="invitation_status", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=InvitationStatus.DRAFT,
        index=True,
    )
    wedding_data = Column(Text, nullable=False)  # JSON data, opaque to the backend
    custom_css = Column(Text, nullable=True)
    view_count = Column(Integer, nullable=False, default=0)
    rsvp_count = Column(Integer, nullable=False, default=0)
    published_at = Column(DateTime(timezone=True), nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    owner = relationship("User", back_populates="invitations")
    template = relationship("Template", back_populates="invitations")
