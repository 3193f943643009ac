"""
User service: registration, authentication, profile updates and mitra approval.

Name, email and phone are masked at rest; every function here returns
UserRecord objects carrying the unmasked values so callers never see
masked data and the ORM rows are never mutated with plaintext.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from invitely.core.exceptions import NotFoundError, ConflictError, AuthorizationError
from invitely.models.user import User, UserRole, UserStatus
from invitely.models.login_log import LoginLog
from invitely.services.masking import get_field_masker, truncate_utf8
from invitely.services.security import hash_password, verify_password
from invitely.services.email import send_account_approved_email

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "email", "phone", "status", "approved_by")

# Byte limits applied before masking so the token fits the login_logs columns
IP_ADDRESS_MAX_BYTES = 64
USER_AGENT_MAX_BYTES = 512


@dataclass
class UserRecord:
    """User with unmasked personal fields."""
    id: int
    name: str
    username: str
    email: str
    phone: Optional[str]
    role: UserRole
    status: UserStatus
    created_at: datetime
    updated_at: datetime
    last_login: Optional[datetime]
    approved_by: Optional[int]
    approved_at: Optional[datetime]

    @classmethod
    def from_model(cls, user: User) -> "UserRecord":
        """Create UserRecord from a stored (masked) User row."""
        masker = get_field_masker()
        return cls(
            id=user.id,
            name=masker.unmask(user.name),
            username=user.username,
            email=masker.unmask(user.email),
            phone=masker.unmask(user.phone),
            role=user.role,
            status=user.status,
            created_at=user.created_at,
            updated_at=user.updated_at,
            last_login=user.last_login,
            approved_by=user.approved_by,
            approved_at=user.approved_at,
        )


@dataclass
class LoginLogRecord:
    """Login attempt with unmasked client details."""
    id: int
    user_id: int
    login_time: datetime
    ip_address: str
    user_agent: str
    success: bool


def initial_status_for_role(role: UserRole) -> UserStatus:
    """Mitra partners wait for approval, everyone else starts active."""
    return UserStatus.PENDING if role == UserRole.USER_MITRA else UserStatus.ACTIVE


def _get_user_or_404(db: Session, user_id: int, label: str = "User") -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError(f"{label} not found")
    return user


def _commit_user(db: Session, user: User) -> None:
    """Commit, translating unique-constraint races into ConflictError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Unique constraint violated while saving user {user.username}: {e.orig}")
        raise ConflictError("Username or email already exists")
    db.refresh(user)


def create_user(
    db: Session,
    name: str,
    username: str,
    email: str,
    password: str,
    role: UserRole,
    phone: Optional[str] = None,
) -> UserRecord:
    """
    Register a new user.

    The email is masked deterministically so the unique constraint on the
    masked column still detects duplicates.

    Raises:
        ConflictError: If the username or email is already registered
    """
    role = UserRole(role)
    masker = get_field_masker()
    masked_email = masker.mask(email, deterministic=True)

    if db.query(User.id).filter(User.username == username).first():
        raise ConflictError("Username already exists")
    if db.query(User.id).filter(User.email == masked_email).first():
        raise ConflictError("Email already exists")

    user = User(
        name=masker.mask(name),
        username=username,
        email=masked_email,
        phone=masker.mask(phone) if phone else None,
        password_hash=hash_password(password),
        role=role,
        status=initial_status_for_role(role),
    )
    db.add(user)
    _commit_user(db, user)

    logger.info(f"Created user {user.id} ({username}) with role {role.value}, status {user.status.value}")
    return UserRecord.from_model(user)


def _record_login(db: Session, user_id: int, success: bool, ip_address: str, user_agent: str) -> None:
    masker = get_field_masker()
    db.add(LoginLog(
        user_id=user_id,
        ip_address=masker.mask(truncate_utf8(ip_address, IP_ADDRESS_MAX_BYTES)),
        user_agent=masker.mask(truncate_utf8(user_agent, USER_AGENT_MAX_BYTES)),
        success=success,
    ))


def authenticate_user(
    db: Session,
    username: str,
    password: str,
    ip_address: str = "unknown",
    user_agent: str = "unknown",
) -> Optional[UserRecord]:
    """
    Check credentials and record the attempt in login_logs.

    Returns None (not an error) when the username is unknown or the password
    does not match. Account status is not checked here.
    """
    user = db.query(User).filter(User.username == username).first()

    if not user:
        _record_login(db, 0, False, ip_address, user_agent)
        db.commit()
        logger.info(f"Failed login for unknown username {username}")
        return None

    if not verify_password(password, user.password_hash):
        _record_login(db, user.id, False, ip_address, user_agent)
        db.commit()
        logger.info(f"Failed login for user {user.id}: wrong password")
        return None

    user.last_login = datetime.now(timezone.utc)
    _record_login(db, user.id, True, ip_address, user_agent)
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.id} logged in")
    return UserRecord.from_model(user)


def update_user(db: Session, user_id: int, updates: dict) -> UserRecord:
    """
    Partially update a user.

    Only keys present in `updates` are touched. Setting approved_by stamps
    approved_at; setting it to None clears both.

    Raises:
        NotFoundError: If the user (or the approver) does not exist
        ConflictError: If the new email belongs to another user
    """
    user = _get_user_or_404(db, user_id)
    masker = get_field_masker()

    for field in UPDATABLE_FIELDS:
        if field not in updates:
            continue
        value = updates[field]
        if value is None and field in ("name", "email", "status"):
            continue

        if field == "name":
            user.name = masker.mask(value)
        elif field == "email":
            masked_email = masker.mask(value, deterministic=True)
            taken = db.query(User.id).filter(User.email == masked_email, User.id != user.id).first()
            if taken:
                raise ConflictError("Email already exists")
            user.email = masked_email
        elif field == "phone":
            user.phone = masker.mask(value) if value else None
        elif field == "status":
            user.status = UserStatus(value)
        elif field == "approved_by":
            if value is None:
                user.approved_by = None
                user.approved_at = None
            else:
                _get_user_or_404(db, value, label="Approver")
                user.approved_by = value
                user.approved_at = datetime.now(timezone.utc)

    _commit_user(db, user)
    logger.info(f"Updated user {user.id}: {sorted(k for k in updates if k in UPDATABLE_FIELDS)}")
    return UserRecord.from_model(user)


def approve_user(db: Session, user_id: int, approver_id: int) -> UserRecord:
    """
    Activate a pending account.

    Raises:
        NotFoundError: If the user or the approver does not exist
        AuthorizationError: If the approver is not a super admin
    """
    user = _get_user_or_404(db, user_id)
    approver = _get_user_or_404(db, approver_id, label="Approver")
    if not approver.is_super_admin():
        raise AuthorizationError("Only super admins can approve users")

    user.status = UserStatus.ACTIVE
    user.approved_by = approver.id
    user.approved_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)

    record = UserRecord.from_model(user)
    logger.info(f"User {user.id} approved by {approver.id}")

    if not send_account_approved_email(record.email, record.name):
        logger.warning(f"Approval email for user {user.id} was not sent")

    return record


def get_users(db: Session) -> List[UserRecord]:
    users = db.query(User).order_by(User.id).all()
    return [UserRecord.from_model(u) for u in users]


def get_users_pending_approval(db: Session) -> List[UserRecord]:
    users = db.query(User).filter(User.status == UserStatus.PENDING).order_by(User.id).all()
    return [UserRecord.from_model(u) for u in users]


def get_user_login_logs(db: Session, user_id: int, limit: int = 100) -> List[LoginLogRecord]:
    """Newest-first login history. user_id=0 lists attempts on unknown usernames."""
    masker = get_field_masker()
    logs = db.query(LoginLog).filter(
        LoginLog.user_id == user_id
    ).order_by(LoginLog.login_time.desc(), LoginLog.id.desc()).limit(limit).all()

    return [
        LoginLogRecord(
            id=log.id,
            user_id=log.user_id,
            login_time=log.login_time,
            ip_address=masker.unmask(log.ip_address),
            user_agent=masker.unmask(log.user_agent),
            success=log.success,
        )
        for log in logs
    ]
