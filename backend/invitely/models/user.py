"""
User model for registration, login and mitra approval.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum
from invitely.core.database import Base


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    USER_MITRA = "user_mitra"  # Partner account, needs admin approval
    USER_CUSTOMER = "user_customer"


class UserStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"
    REJECTED = "rejected"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(512), nullable=False)  # Masked at rest
    username = Column(String(100), unique=True, index=True, nullable=False)
    email = Column(String(512), unique=True, index=True, nullable=False)  # Masked at rest (deterministic)
    phone = Column(String(512), nullable=True)  # Masked at rest
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole, name="user_role", values_callable=lambda x: [e.value for e in x]), nullable=False)
    status = Column(
        SQLEnum(UserStatus, name="user_status", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        default=UserStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    approved_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    approved_at = Column(DateTime(timezone=True), nullable=True)

    approver = relationship("User", remote_side=[id], foreign_keys=[approved_by])
    invitations = relationship("Invitation", back_populates="owner")

    def is_super_admin(self) -> bool:
        """Check if user is platform super admin."""
        return self.role == UserRole.SUPER_ADMIN
