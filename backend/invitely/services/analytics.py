"""
Read-only dashboard aggregates.
"""
from datetime import datetime
from typing import Optional
from sqlalchemy import func, distinct, case, true
from sqlalchemy.orm import Session
from invitely.models.user import User, UserStatus
from invitely.models.invitation import Invitation, InvitationStatus
from invitely.models.visitor import Visitor
from invitely.services.access import resolve_viewer, invitation_visibility

TOP_INVITATIONS_LIMIT = 10


def get_visitor_stats(
    db: Session,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    invitation_id: Optional[int] = None,
) -> dict:
    """
    Visitor totals, distinct ip count, most viewed invitations and visits per day.

    All filters are optional and combine; the date range is inclusive.
    """
    filters = []
    if start_date is not None:
        filters.append(Visitor.visited_at >= start_date)
    if end_date is not None:
        filters.append(Visitor.visited_at <= end_date)
    if invitation_id is not None:
        filters.append(Visitor.invitation_id == invitation_id)

    total_visitors, unique_visitors = db.query(
        func.count(Visitor.id),
        func.count(distinct(Visitor.ip_address)),
    ).filter(*filters).one()

    views = func.count(Visitor.id).label("views")
    top_rows = db.query(Invitation.id, Invitation.title, views).join(
        Visitor, Visitor.invitation_id == Invitation.id
    ).filter(*filters).group_by(
        Invitation.id, Invitation.title
    ).order_by(views.desc(), Invitation.id).limit(TOP_INVITATIONS_LIMIT).all()

    day = func.date(Visitor.visited_at).label("day")
    daily_rows = db.query(day, func.count(Visitor.id)).filter(*filters).group_by(day).order_by(day).all()

    return {
        "total_visitors": total_visitors or 0,
        "unique_visitors": unique_visitors or 0,
        "top_invitations": [
            {"invitation_id": row[0], "title": row[1], "views": row[2]}
            for row in top_rows
        ],
        # MySQL returns date objects, SQLite returns ISO strings
        "daily_stats": [
            {"date": str(row[0]), "visitors": row[1]}
            for row in daily_rows
        ],
    }


def get_user_stats(db: Session) -> dict:
    total_users, active_users, pending_approvals = db.query(
        func.count(User.id),
        func.sum(case((User.status == UserStatus.ACTIVE, 1), else_=0)),
        func.sum(case((User.status == UserStatus.PENDING, 1), else_=0)),
    ).one()

    role_rows = db.query(User.role, func.count(User.id)).group_by(User.role).order_by(User.role).all()

    return {
        "total_users": total_users or 0,
        "active_users": int(active_users or 0),
        "pending_approvals": int(pending_approvals or 0),
        "users_by_role": [
            {"role": role.value, "count": count}
            for role, count in role_rows
        ],
    }


def get_invitation_stats(db: Session, user_id: Optional[int] = None) -> dict:
    """
    Invitation totals. Without a user the figures are platform-wide; with a
    user they cover what that user can see (all for super admins, own
    invitations otherwise).
    """
    scope = true() if user_id is None else invitation_visibility(resolve_viewer(db, user_id))

    total, published, draft, total_views, total_rsvps = db.query(
        func.count(Invitation.id),
        func.sum(case((Invitation.status == InvitationStatus.PUBLISHED, 1), else_=0)),
        func.sum(case((Invitation.status == InvitationStatus.DRAFT, 1), else_=0)),
        func.sum(Invitation.view_count),
        func.sum(Invitation.rsvp_count),
    ).filter(scope).one()

    return {
        "total_invitations": total or 0,
        "published_invitations": int(published or 0),
        "draft_invitations": int(draft or 0),
        "total_views": int(total_views or 0),
        "total_rsvps": int(total_rsvps or 0),
    }
