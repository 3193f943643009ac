"""
Template service.
"""
import json
import logging
from typing import Optional, List
from sqlalchemy.orm import Session
from invitely.core.exceptions import InvalidInputError
from invitely.models.template import Template, TemplateCategory

logger = logging.getLogger(__name__)


def validate_json(value: str, field_name: str) -> None:
    """Raise InvalidInputError unless value is syntactically valid JSON."""
    try:
        json.loads(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Invalid {field_name}: must be valid JSON string")


def create_template(
    db: Session,
    name: str,
    category: TemplateCategory,
    thumbnail_url: str,
    preview_url: str,
    template_data: str,
) -> Template:
    validate_json(template_data, "template_data")

    template = Template(
        name=name,
        category=TemplateCategory(category),
        thumbnail_url=thumbnail_url,
        preview_url=preview_url,
        template_data=template_data,
        is_active=True,
    )
    db.add(template)
    db.commit()
    db.refresh(template)

    logger.info(f"Created template {template.id} ({template.category.value})")
    return template


def get_templates(db: Session) -> List[Template]:
    """Active templates, newest first."""
    return db.query(Template).filter(
        Template.is_active.is_(True)
    ).order_by(Template.created_at.desc(), Template.id.desc()).all()


def get_templates_by_category(db: Session, category: str) -> List[Template]:
    """
    Active templates in one category, newest first.

    Raises:
        InvalidInputError: If category is not one of the known categories
    """
    try:
        category = TemplateCategory(category)
    except ValueError:
        allowed = ", ".join(c.value for c in TemplateCategory)
        raise InvalidInputError(f"Invalid category '{category}'. Must be one of: {allowed}")

    return db.query(Template).filter(
        Template.is_active.is_(True),
        Template.category == category,
    ).order_by(Template.created_at.desc(), Template.id.desc()).all()


def get_template_by_id(db: Session, template_id: int) -> Optional[Template]:
    """Any template regardless of is_active (used when editing invitations)."""
    return db.query(Template).filter(Template.id == template_id).first()
