from datetime import datetime, timedelta, timezone
import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query
from invitely.core.exceptions import NotFoundError
from invitely.models.user import UserRole
from invitely.models.visitor import Visitor
from invitely.models.rsvp import RsvpStatus
from invitely.services import analytics, visitors
from invitely.services.rsvps import create_rsvp


def test_log_visitor_masks_and_counts(db, make_published_invitation):
    invitation = make_published_invitation()

    record = visitors.log_visitor(db, invitation.id, "10.0.0.1", "pytest-agent", referrer="https://wa.me")

    assert record.ip_address == "10.0.0.1"
    assert record.user_agent == "pytest-agent"
    stored = db.query(Visitor).one()
    assert stored.ip_address != "10.0.0.1"
    assert stored.user_agent != "pytest-agent"
    assert stored.referrer == "https://wa.me"

    db.refresh(invitation)
    assert invitation.view_count == 1


def test_log_visitor_unknown_invitation(db):
    with pytest.raises(NotFoundError, match="Invitation with id 9999 not found"):
        visitors.log_visitor(db, 9999, "10.0.0.1", "pytest-agent")


def test_visitor_stats(db, make_published_invitation):
    popular = make_published_invitation(title="Popular")
    quiet = make_published_invitation(title="Quiet")
    for ip in ("10.0.0.1", "10.0.0.1", "10.0.0.2"):
        visitors.log_visitor(db, popular.id, ip, "agent")
    visitors.log_visitor(db, quiet.id, "10.0.0.3", "agent")

    stats = analytics.get_visitor_stats(db)

    assert stats["total_visitors"] == 4
    assert stats["unique_visitors"] == 3
    assert stats["top_invitations"] == [
        {"invitation_id": popular.id, "title": "Popular", "views": 3},
        {"invitation_id": quiet.id, "title": "Quiet", "views": 1},
    ]
    assert sum(day["visitors"] for day in stats["daily_stats"]) == 4

    scoped = analytics.get_visitor_stats(db, invitation_id=popular.id)
    assert scoped["total_visitors"] == 3
    assert scoped["unique_visitors"] == 2


def test_visitor_stats_date_range(db, make_published_invitation):
    invitation = make_published_invitation()
    visitors.log_visitor(db, invitation.id, "10.0.0.1", "agent")

    future = datetime.now(timezone.utc) + timedelta(days=2)
    assert analytics.get_visitor_stats(db, start_date=future)["total_visitors"] == 0
    assert analytics.get_visitor_stats(db, end_date=future)["total_visitors"] == 1


def test_user_stats(make_user, db):
    make_user(role=UserRole.SUPER_ADMIN)
    make_user(role=UserRole.USER_MITRA)
    make_user(role=UserRole.USER_MITRA)
    make_user(role=UserRole.USER_CUSTOMER)

    stats = analytics.get_user_stats(db)

    assert stats["total_users"] == 4
    assert stats["active_users"] == 2
    assert stats["pending_approvals"] == 2
    counts = {entry["role"]: entry["count"] for entry in stats["users_by_role"]}
    assert counts == {"super_admin": 1, "user_mitra": 2, "user_customer": 1}


def test_invitation_stats_scoped_by_viewer(db, make_user, make_invitation, make_published_invitation):
    admin = make_user(role=UserRole.SUPER_ADMIN)
    owner = make_user()
    published = make_published_invitation(user=owner)
    make_invitation(user=owner)
    make_invitation()
    create_rsvp(db, published.id, "Andi", RsvpStatus.ATTENDING, 2)
    visitors.log_visitor(db, published.id, "10.0.0.1", "agent")

    platform = analytics.get_invitation_stats(db)
    assert platform == {
        "total_invitations": 3,
        "published_invitations": 1,
        "draft_invitations": 2,
        "total_views": 1,
        "total_rsvps": 1,
    }
    assert analytics.get_invitation_stats(db, admin.id) == platform

    own = analytics.get_invitation_stats(db, owner.id)
    assert own["total_invitations"] == 2
    assert own["draft_invitations"] == 1


def test_log_visitor_is_all_or_nothing(db, monkeypatch, make_published_invitation):
    invitation = make_published_invitation()

    def failing_update(self, *args, **kwargs):
        raise SQLAlchemyError("counter update failed")

    monkeypatch.setattr(Query, "update", failing_update)
    with pytest.raises(SQLAlchemyError):
        visitors.log_visitor(db, invitation.id, "10.0.0.1", "pytest-agent")
    monkeypatch.undo()

    assert db.query(Visitor).count() == 0
    db.refresh(invitation)
    assert invitation.view_count == 0


def test_log_visitor_caps_user_agent(db, make_published_invitation):
    invitation = make_published_invitation()
    user_agent = "Mozilla/5.0 " + "ü" * 1500

    record = visitors.log_visitor(db, invitation.id, "10.0.0.1", user_agent)

    assert record.user_agent == user_agent
    stored = db.query(Visitor).one()
    assert len(stored.user_agent) <= 1024
