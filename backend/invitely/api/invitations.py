"""
Invitation procedures.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from invitely.core.database import get_db
from invitely.models.invitation import InvitationStatus
from invitely.services import invitations as invitation_service

router = APIRouter()


class CreateInvitationRequest(BaseModel):
    user_id: int
    template_id: int
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    wedding_data: str  # JSON string
    custom_css: Optional[str] = None
    expires_at: Optional[datetime] = None


class UpdateInvitationRequest(BaseModel):
    """All fields except id optional; only supplied fields are updated."""
    id: int
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    status: Optional[InvitationStatus] = None
    wedding_data: Optional[str] = None
    custom_css: Optional[str] = None
    expires_at: Optional[datetime] = None


class PublishInvitationRequest(BaseModel):
    invitation_id: int = Field(..., alias="invitationId")

    class Config:
        populate_by_name = True


class DeleteInvitationRequest(BaseModel):
    invitation_id: int = Field(..., alias="invitationId")
    user_id: int = Field(..., alias="userId")

    class Config:
        populate_by_name = True


class InvitationResponse(BaseModel):
    id: int
    user_id: int
    template_id: int
    title: str
    slug: str
    status: InvitationStatus
    wedding_data: str
    custom_css: Optional[str]
    view_count: int
    rsvp_count: int
    published_at: Optional[datetime]
    expires_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.post("/createInvitation", response_model=InvitationResponse)
async def create_invitation(request: CreateInvitationRequest, db: Session = Depends(get_db)):
    return invitation_service.create_invitation(
        db,
        user_id=request.user_id,
        template_id=request.template_id,
        title=request.title,
        slug=request.slug,
        wedding_data=request.wedding_data,
        custom_css=request.custom_css,
        expires_at=request.expires_at,
    )


@router.get("/checkSlugAvailability", response_model=bool)
async def check_slug_availability(slug: str = Query(...), db: Session = Depends(get_db)):
    return invitation_service.check_slug_availability(db, slug)


@router.get("/getInvitations", response_model=List[InvitationResponse])
async def get_invitations(
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    """Published invitations for anonymous callers, role-scoped list otherwise."""
    return invitation_service.get_invitations(db, user_id)


@router.get("/getInvitationBySlug", response_model=Optional[InvitationResponse])
async def get_invitation_by_slug(slug: str = Query(...), db: Session = Depends(get_db)):
    return invitation_service.get_invitation_by_slug(db, slug)


@router.get("/getInvitationById", response_model=Optional[InvitationResponse])
async def get_invitation_by_id(
    id: int = Query(...),
    user_id: Optional[int] = Query(None, alias="userId"),
    db: Session = Depends(get_db)
):
    return invitation_service.get_invitation_by_id(db, id, user_id)


@router.post("/updateInvitation", response_model=InvitationResponse)
async def update_invitation(request: UpdateInvitationRequest, db: Session = Depends(get_db)):
    updates = request.model_dump(exclude_unset=True, exclude={"id"})
    return invitation_service.update_invitation(db, request.id, updates)


@router.post("/publishInvitation", response_model=InvitationResponse)
async def publish_invitation(request: PublishInvitationRequest, db: Session = Depends(get_db)):
    return invitation_service.publish_invitation(db, request.invitation_id)


@router.post("/deleteInvitation", response_model=bool)
async def delete_invitation(request: DeleteInvitationRequest, db: Session = Depends(get_db)):
    return invitation_service.delete_invitation(db, request.invitation_id, request.user_id)
