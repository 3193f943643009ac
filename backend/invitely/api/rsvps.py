"""
RSVP procedures.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List
from datetime import datetime
from invitely.core.database import get_db
from invitely.models.rsvp import RsvpStatus
from invitely.services import rsvps as rsvp_service

router = APIRouter()


class CreateRsvpRequest(BaseModel):
    invitation_id: int
    guest_name: str = Field(..., min_length=1, max_length=255)
    guest_email: Optional[EmailStr] = None
    guest_phone: Optional[str] = Field(None, max_length=50)
    status: RsvpStatus
    guest_count: int = Field(..., gt=0)
    message: Optional[str] = None


class RsvpResponse(BaseModel):
    id: int
    invitation_id: int
    guest_name: str
    guest_email: Optional[str]
    guest_phone: Optional[str]
    status: RsvpStatus
    guest_count: int
    message: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class RsvpStatsResponse(BaseModel):
    total: int
    attending: int
    not_attending: int
    maybe: int
    total_guests: int


@router.post("/createRsvp", response_model=RsvpResponse)
async def create_rsvp(request: CreateRsvpRequest, db: Session = Depends(get_db)):
    return rsvp_service.create_rsvp(
        db,
        invitation_id=request.invitation_id,
        guest_name=request.guest_name,
        guest_email=request.guest_email,
        guest_phone=request.guest_phone,
        status=request.status,
        guest_count=request.guest_count,
        message=request.message,
    )


@router.get("/getRsvpsByInvitation", response_model=List[RsvpResponse])
async def get_rsvps_by_invitation(
    invitation_id: int = Query(..., alias="invitationId"),
    user_id: int = Query(..., alias="userId"),
    db: Session = Depends(get_db)
):
    """Guest list, restricted to the invitation owner and super admins."""
    return rsvp_service.get_rsvps_by_invitation(db, invitation_id, user_id)


@router.get("/getRsvpStats", response_model=RsvpStatsResponse)
async def get_rsvp_stats(
    invitation_id: int = Query(..., alias="invitationId"),
    db: Session = Depends(get_db)
):
    return rsvp_service.get_rsvp_stats(db, invitation_id)
