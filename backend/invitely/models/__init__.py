"""
Database models.
"""
from invitely.models.user import User, UserRole, UserStatus
from invitely.models.login_log import LoginLog
from invitely.models.template import Template, TemplateCategory
from invitely.models.invitation import Invitation, InvitationStatus
from invitely.models.rsvp import Rsvp, RsvpStatus
from invitely.models.guestbook import Guestbook
from invitely.models.payment import Payment, PaymentStatus
from invitely.models.visitor import Visitor

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "LoginLog",
    "Template",
    "TemplateCategory",
    "Invitation",
    "InvitationStatus",
    "Rsvp",
    "RsvpStatus",
    "Guestbook",
    "Payment",
    "PaymentStatus",
    "Visitor",
]
