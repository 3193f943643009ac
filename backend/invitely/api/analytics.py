"""
Visitor logging and dashboard statistics procedures.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from invitely.core.database import get_db
from invitely.services import analytics as analytics_service
from invitely.services.visitors import log_visitor as log_visitor_service

router = APIRouter()


class LogVisitorRequest(BaseModel):
    invitation_id: int = Field(..., alias="invitationId")
    ip_address: str = Field(..., alias="ipAddress", min_length=1, max_length=64)
    user_agent: str = Field(..., alias="userAgent", max_length=512)
    referrer: Optional[str] = Field(None, max_length=1024)

    class Config:
        populate_by_name = True


class VisitorResponse(BaseModel):
    id: int
    invitation_id: int
    ip_address: str
    user_agent: str
    referrer: Optional[str]
    visited_at: datetime

    class Config:
        from_attributes = True


class TopInvitation(BaseModel):
    invitation_id: int
    title: str
    views: int


class DailyVisitors(BaseModel):
    date: str
    visitors: int


class VisitorStatsResponse(BaseModel):
    total_visitors: int
    unique_visitors: int
    top_invitations: List[TopInvitation]
    daily_stats: List[DailyVisitors]


class RoleCount(BaseModel):
    role: str
    count: int


class UserStatsResponse(BaseModel):
    total_users: int
    active_users: int
    pending_approvals: int
    users_by_role: List[RoleCount]


class InvitationStatsResponse(BaseModel):
    total_invitations: int
    published_invitations: int
    draft_invitations: int
    total_views: int
    total_rsvps: int


@router.post("/logVisitor", response_model=VisitorResponse)
async def log_visitor(request: LogVisitorRequest, db: Session = Depends(get_db)):
    return log_visitor_service(
        db,
        invitation_id=request.invitation_id,
        ip_address=request.ip_address,
        user_agent=request.user_agent,
        referrer=request.referrer,
    )


@router.get("/getVisitorStats", response_model=VisitorStatsResponse)
async def get_visitor_stats(
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    invitation_id: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    return analytics_service.get_visitor_stats(db, start_date, end_date, invitation_id)


@router.get("/getUserStats", response_model=UserStatsResponse)
async def get_user_stats(db: Session = Depends(get_db)):
    return analytics_service.get_user_stats(db)


@router.get("/getInvitationStats", response_model=InvitationStatsResponse)
async def get_invitation_stats(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    return analytics_service.get_invitation_stats(db, user_id)
