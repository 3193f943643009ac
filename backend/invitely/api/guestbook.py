"""
Guestbook procedures.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from invitely.core.database import get_db
from invitely.services import guestbook as guestbook_service

router = APIRouter()


class CreateGuestbookRequest(BaseModel):
    invitation_id: int
    guest_name: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=2000)


class GuestbookModerationRequest(BaseModel):
    entry_id: int = Field(..., alias="entryId")
    user_id: int = Field(..., alias="userId")

    class Config:
        populate_by_name = True


class GuestbookResponse(BaseModel):
    id: int
    invitation_id: int
    guest_name: str
    message: str
    is_approved: bool
    created_at: datetime

    class Config:
        from_attributes = True


@router.post("/createGuestbook", response_model=GuestbookResponse)
async def create_guestbook(request: CreateGuestbookRequest, db: Session = Depends(get_db)):
    return guestbook_service.create_guestbook(
        db,
        invitation_id=request.invitation_id,
        guest_name=request.guest_name,
        message=request.message,
    )


@router.get("/getGuestbookEntries", response_model=List[GuestbookResponse])
async def get_guestbook_entries(
    invitation_id: int = Query(..., alias="invitationId"),
    include_unapproved: bool = Query(False, alias="includeUnapproved"),
    db: Session = Depends(get_db)
):
    return guestbook_service.get_guestbook_entries(db, invitation_id, include_unapproved)


@router.post("/approveGuestbookEntry", response_model=GuestbookResponse)
async def approve_guestbook_entry(request: GuestbookModerationRequest, db: Session = Depends(get_db)):
    return guestbook_service.approve_guestbook_entry(db, request.entry_id, request.user_id)


@router.post("/deleteGuestbookEntry", response_model=bool)
async def delete_guestbook_entry(request: GuestbookModerationRequest, db: Session = Depends(get_db)):
    return guestbook_service.delete_guestbook_entry(db, request.entry_id, request.user_id)
