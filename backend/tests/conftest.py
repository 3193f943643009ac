"""
Shared fixtures: in-memory SQLite database, FastAPI client, entity factories.
"""
import json
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import invitely.models  # noqa: F401  registers tables on Base.metadata
from invitely.core.database import Base, get_db
from invitely.main import app
from invitely.models.user import UserRole
from invitely.models.template import TemplateCategory
from invitely.services.masking import FernetFieldMasker, set_field_masker
from invitely.services.users import create_user
from invitely.services.templates import create_template
from invitely.services.invitations import create_invitation
from invitely.services.payments import create_payment, process_payment

DEFAULT_PASSWORD = "correct-horse-battery"
WEDDING_DATA = json.dumps({
    "bride": "Sari",
    "groom": "Budi",
    "date": "2026-12-12",
    "venue": "Gedung Serbaguna",
})


@pytest.fixture(autouse=True)
def field_masker():
    masker = FernetFieldMasker("test-masking-secret")
    set_field_masker(masker)
    yield masker
    set_field_masker(None)


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=UserRole.USER_CUSTOMER, username=None, email=None, **kwargs):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        return create_user(
            db,
            name=kwargs.pop("name", f"User {counter['n']}"),
            username=username,
            email=email or f"{username}@example.com",
            password=kwargs.pop("password", DEFAULT_PASSWORD),
            role=role,
            phone=kwargs.pop("phone", None),
        )

    return _make_user


@pytest.fixture()
def make_template(db):
    def _make_template(category=TemplateCategory.ROMANTIC, name="Rose Garden"):
        return create_template(
            db,
            name=name,
            category=category,
            thumbnail_url="/thumb.jpg",
            preview_url="/preview.html",
            template_data=json.dumps({"palette": "pink"}),
        )

    return _make_template


@pytest.fixture()
def make_invitation(db, make_user, make_template):
    counter = {"n": 0}

    def _make_invitation(user=None, template=None, slug=None, **kwargs):
        counter["n"] += 1
        user = user or make_user()
        template = template or make_template()
        return create_invitation(
            db,
            user_id=user.id,
            template_id=template.id,
            title=kwargs.pop("title", f"Wedding {counter['n']}"),
            slug=slug or f"wedding-{counter['n']}",
            wedding_data=kwargs.pop("wedding_data", WEDDING_DATA),
            custom_css=kwargs.pop("custom_css", None),
            expires_at=kwargs.pop("expires_at", None),
        )

    return _make_invitation


@pytest.fixture()
def make_published_invitation(db, make_invitation):
    """Invitation published through a completed payment."""
    def _make_published_invitation(**kwargs):
        invitation = make_invitation(**kwargs)
        payment = create_payment(
            db,
            user_id=invitation.user_id,
            invitation_id=invitation.id,
            amount=150,
            currency="IDR",
            payment_method="bank_transfer",
        )
        process_payment(db, payment.id, {"success": True, "reference": "GW-1"})
        db.refresh(invitation)
        return invitation

    return _make_published_invitation
