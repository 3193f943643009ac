"""
Invitation template model.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from invitely.core.database import Base


class TemplateCategory(str, enum.Enum):
    ROMANTIC = "romantic"
    CONTEMPORARY = "contemporary"
    FORMAL = "formal"
    TRADITIONAL = "traditional"


class Template(Base):
    __tablename__ = "templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(
        SQLEnum(TemplateCategory, name="template_category", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    thumbnail_url = Column(String(1024), nullable=False)
    preview_url = Column(String(1024), nullable=False)
    template_data = Column(Text, nullable=False)  # JSON structure, opaque to the backend
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    invitations = relationship("Invitation", back_populates="template")
