"""
Login log model. Append-only record of every authentication attempt.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from invitely.core.database import Base


class LoginLog(Base):
    __tablename__ = "login_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)  # 0 when the username is unknown, so no FK
    login_time = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    ip_address = Column(String(512), nullable=False)  # Masked at rest
    user_agent = Column(String(1024), nullable=False)  # Masked at rest
    success = Column(Boolean, nullable=False)
