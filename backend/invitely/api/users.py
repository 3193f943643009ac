"""
User procedures: registration, login, approval.
"""
from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime
from invitely.core.database import get_db
from invitely.core.auth import create_session, delete_session, get_current_user_optional
from invitely.core.config import SESSION_COOKIE_NAME
from invitely.models.user import User, UserRole, UserStatus
from invitely.services import users as user_service

router = APIRouter()


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=50)
    password: str = Field(..., min_length=8, max_length=72)  # bcrypt uses the first 72 bytes
    role: UserRole


class LoginRequest(BaseModel):
    username: str
    password: str


class UpdateUserRequest(BaseModel):
    """All fields except id optional; only supplied fields are updated."""
    id: int
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    status: Optional[UserStatus] = None
    approved_by: Optional[int] = None


class ApproveUserRequest(BaseModel):
    user_id: int = Field(..., alias="userId")
    approver_id: int = Field(..., alias="approverId")

    class Config:
        populate_by_name = True


class UserResponse(BaseModel):
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

    class Config:
        from_attributes = True


class LoginLogResponse(BaseModel):
    id: int
    user_id: int
    login_time: datetime
    ip_address: str
    user_agent: str
    success: bool

    class Config:
        from_attributes = True


@router.post("/createUser", response_model=UserResponse)
async def create_user(request: CreateUserRequest, db: Session = Depends(get_db)):
    """Register a user. Mitra accounts start pending until approved."""
    return user_service.create_user(
        db,
        name=request.name,
        username=request.username,
        email=request.email,
        phone=request.phone,
        password=request.password,
        role=request.role,
    )


@router.post("/authenticateUser", response_model=Optional[UserResponse])
async def authenticate_user(
    request: LoginRequest,
    http_request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    """Check credentials. Returns null on mismatch and sets a session cookie on success."""
    user = user_service.authenticate_user(
        db,
        username=request.username,
        password=request.password,
        ip_address=http_request.client.host if http_request.client else "unknown",
        user_agent=http_request.headers.get("user-agent", "unknown"),
    )
    if user is None:
        return None

    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=create_session(user.id, user.username, user.role.value),
        httponly=True,
        secure=False,  # Set to True in production with HTTPS
        samesite="lax",
        max_age=86400,  # 24 hours
        path="/",
    )
    return user


@router.post("/logout", response_model=dict)
async def logout(http_request: Request, response: Response):
    """Logout and clear session."""
    session_token = http_request.cookies.get(SESSION_COOKIE_NAME)
    if session_token:
        delete_session(session_token)

    response.delete_cookie(key=SESSION_COOKIE_NAME, httponly=True, samesite="lax")
    return {"success": True, "message": "Logged out"}


@router.get("/getCurrentUser", response_model=Optional[UserResponse])
async def get_current_user(current_user: Optional[User] = Depends(get_current_user_optional)):
    if current_user is None:
        return None
    return user_service.UserRecord.from_model(current_user)


@router.get("/getUsers", response_model=List[UserResponse])
async def get_users(db: Session = Depends(get_db)):
    return user_service.get_users(db)


@router.get("/getUsersPendingApproval", response_model=List[UserResponse])
async def get_users_pending_approval(db: Session = Depends(get_db)):
    return user_service.get_users_pending_approval(db)


@router.post("/updateUser", response_model=UserResponse)
async def update_user(request: UpdateUserRequest, db: Session = Depends(get_db)):
    updates = request.model_dump(exclude_unset=True, exclude={"id"})
    return user_service.update_user(db, request.id, updates)


@router.post("/approveUser", response_model=UserResponse)
async def approve_user(request: ApproveUserRequest, db: Session = Depends(get_db)):
    return user_service.approve_user(db, request.user_id, request.approver_id)


@router.get("/getLoginLogs", response_model=List[LoginLogResponse])
async def get_login_logs(
    user_id: int = Query(..., alias="userId"),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db)
):
    """Login history for the admin dashboard."""
    return user_service.get_user_login_logs(db, user_id, limit=limit)
