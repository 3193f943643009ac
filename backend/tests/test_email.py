import smtplib
import pytest
from invitely.core import config
from invitely.services import email as email_service


@pytest.fixture()
def captured_mail(monkeypatch):
    sent = []
    monkeypatch.setattr(email_service, "send_email", lambda **kwargs: sent.append(kwargs) or True)
    return sent


def test_guestbook_notification_escapes_guest_input(captured_mail):
    email_service.send_guestbook_notification_email(
        "owner@example.com",
        "Sari & Budi",
        "<a href='http://evil'>Click</a>",
        "<script>alert(1)</script>",
        True,
    )

    html_body = captured_mail[0]["html_body"]
    assert "<script>" not in html_body
    assert "<a href='http://evil'>" not in html_body
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html_body
    assert "Sari &amp; Budi" in html_body
    assert "<script>alert(1)</script>" in captured_mail[0]["text_body"]


def test_approval_email_escapes_user_name(captured_mail):
    email_service.send_account_approved_email("mitra@example.com", "<b>Mitra</b>")

    assert "<b>Mitra</b>" not in captured_mail[0]["html_body"]
    assert "&lt;b&gt;Mitra&lt;/b&gt;" in captured_mail[0]["html_body"]


class FailingSMTP:
    instances = []

    def __init__(self, host, port, timeout=None):
        self.closed = False
        FailingSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False

    def starttls(self):
        pass

    def login(self, username, password):
        raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    def send_message(self, msg):
        raise AssertionError("must not send after a failed login")


@pytest.mark.parametrize("use_ssl, factory", [(True, "SMTP_SSL"), (False, "SMTP")])
def test_smtp_connection_closed_when_login_fails(monkeypatch, use_ssl, factory):
    FailingSMTP.instances = []
    monkeypatch.setattr(config, "SMTP_HOST", "smtp.example.com")
    monkeypatch.setattr(config, "SMTP_USERNAME", "no-reply@example.com")
    monkeypatch.setattr(config, "SMTP_PASSWORD", "secret")
    monkeypatch.setattr(config, "SMTP_USE_SSL", use_ssl)
    monkeypatch.setattr(email_service.smtplib, factory, FailingSMTP)

    assert email_service.send_email("owner@example.com", "Subject", "<p>Hi</p>") is False
    assert len(FailingSMTP.instances) == 1
    assert FailingSMTP.instances[0].closed is True
