"""
Template procedures.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from invitely.core.database import get_db
from invitely.models.template import TemplateCategory
from invitely.services import templates as template_service

router = APIRouter()


class CreateTemplateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: TemplateCategory
    thumbnail_url: str = Field(..., max_length=1024)
    preview_url: str = Field(..., max_length=1024)
    template_data: str  # JSON string


class TemplateResponse(BaseModel):
    id: int
    name: str
    category: TemplateCategory
    thumbnail_url: str
    preview_url: str
    template_data: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("/getTemplates", response_model=List[TemplateResponse])
async def get_templates(db: Session = Depends(get_db)):
    return template_service.get_templates(db)


@router.get("/getTemplatesByCategory", response_model=List[TemplateResponse])
async def get_templates_by_category(category: str = Query(...), db: Session = Depends(get_db)):
    # Category is validated by the service so unknown values get a descriptive error
    return template_service.get_templates_by_category(db, category)


@router.get("/getTemplateById", response_model=Optional[TemplateResponse])
async def get_template_by_id(id: int = Query(...), db: Session = Depends(get_db)):
    return template_service.get_template_by_id(db, id)


@router.post("/createTemplate", response_model=TemplateResponse)
async def create_template(request: CreateTemplateRequest, db: Session = Depends(get_db)):
    return template_service.create_template(
        db,
        name=request.name,
        category=request.category,
        thumbnail_url=request.thumbnail_url,
        preview_url=request.preview_url,
        template_data=request.template_data,
    )
