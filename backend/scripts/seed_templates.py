"""
Seed one starter template per category.
"""
import sys
import json
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from invitely.core.database import SessionLocal
from invitely.models.template import Template, TemplateCategory
from invitely.services.templates import create_template

TEMPLATES = [
    {
        "name": "Rose Garden",
        "category": TemplateCategory.ROMANTIC,
        "thumbnail_url": "/static/templates/rose-garden/thumb.jpg",
        "preview_url": "/static/templates/rose-garden/preview.html",
        "template_data": {
            "palette": {"primary": "#be185d", "background": "#fdf2f8"},
            "fonts": {"heading": "Great Vibes", "body": "Lora"},
            "sections": ["cover", "couple", "event", "gallery", "rsvp", "guestbook"],
        },
    },
    {
        "name": "Clean Lines",
        "category": TemplateCategory.CONTEMPORARY,
        "thumbnail_url": "/static/templates/clean-lines/thumb.jpg",
        "preview_url": "/static/templates/clean-lines/preview.html",
        "template_data": {
            "palette": {"primary": "#111827", "background": "#ffffff"},
            "fonts": {"heading": "Montserrat", "body": "Inter"},
            "sections": ["cover", "event", "map", "rsvp"],
        },
    },
    {
        "name": "Black Tie",
        "category": TemplateCategory.FORMAL,
        "thumbnail_url": "/static/templates/black-tie/thumb.jpg",
        "preview_url": "/static/templates/black-tie/preview.html",
        "template_data": {
            "palette": {"primary": "#b45309", "background": "#0f172a"},
            "fonts": {"heading": "Playfair Display", "body": "Cormorant"},
            "sections": ["cover", "couple", "event", "dress_code", "rsvp"],
        },
    },
    {
        "name": "Batik Heritage",
        "category": TemplateCategory.TRADITIONAL,
        "thumbnail_url": "/static/templates/batik-heritage/thumb.jpg",
        "preview_url": "/static/templates/batik-heritage/preview.html",
        "template_data": {
            "palette": {"primary": "#7c2d12", "background": "#fef3c7"},
            "fonts": {"heading": "Cinzel", "body": "Crimson Text"},
            "sections": ["cover", "couple", "akad", "resepsi", "gallery", "rsvp", "guestbook"],
        },
    },
]


def seed_templates():
    """Insert starter templates whose name is not taken yet."""
    db = SessionLocal()
    try:
        for data in TEMPLATES:
            existing = db.query(Template).filter(Template.name == data["name"]).first()
            if existing:
                print(f"Template {data['name']} already exists, skipping...")
                continue

            template = create_template(
                db,
                name=data["name"],
                category=data["category"],
                thumbnail_url=data["thumbnail_url"],
                preview_url=data["preview_url"],
                template_data=json.dumps(data["template_data"]),
            )
            print(f"Created template {template.id}: {template.name} ({template.category.value})")
    finally:
        db.close()


if __name__ == "__main__":
    seed_templates()
