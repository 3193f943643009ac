"""
Email sending service using SMTP.
"""
import html
import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional
import logging
from invitely.core import config

logger = logging.getLogger(__name__)


def send_email(
    to_email: str,
    subject: str,
    html_body: str,
    text_body: Optional[str] = None
) -> bool:
    """
    Send an email via SMTP.

    Args:
        to_email: Recipient email address
        subject: Email subject
        html_body: HTML email body
        text_body: Plain text email body (optional)

    Returns:
        True if email sent successfully, False otherwise
    """
    if not config.SMTP_HOST or not config.SMTP_USERNAME or not config.SMTP_PASSWORD:
        logger.info(f"SMTP not configured, skipping email '{subject}'")
        return False

    try:
        msg = MIMEMultipart('alternative')
        msg['Subject'] = subject
        msg['From'] = f"{config.SMTP_FROM_NAME} <{config.SMTP_FROM_EMAIL or config.SMTP_USERNAME}>"
        msg['To'] = to_email

        if text_body:
            msg.attach(MIMEText(text_body, 'plain', 'utf-8'))

        msg.attach(MIMEText(html_body, 'html', 'utf-8'))

        if config.SMTP_USE_SSL:
            with smtplib.SMTP_SSL(config.SMTP_HOST, config.SMTP_PORT, timeout=10) as server:
                server.login(config.SMTP_USERNAME, config.SMTP_PASSWORD)
                server.send_message(msg)
        else:
            with smtplib.SMTP(config.SMTP_HOST, config.SMTP_PORT, timeout=10) as server:
                server.starttls()
                server.login(config.SMTP_USERNAME, config.SMTP_PASSWORD)
                server.send_message(msg)

        logger.info(f"Email sent successfully to {to_email}")
        return True

    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send email to {to_email}: {str(e)}", exc_info=True)
        return False


def send_account_approved_email(email: str, user_name: Optional[str] = None) -> bool:
    """Tell a mitra partner their account was approved."""
    greeting = f"Hello, {user_name}!" if user_name else "Hello!"
    login_url = f"{config.FRONTEND_BASE_URL}/login"

    text_body = f"""{greeting}

Your Invitely partner account has been approved. You can now sign in and start creating invitations:

{login_url}

The Invitely Team"""

    html_body = f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2 style="color: #be185d;">Your account is approved</h2>
        <p>{html.escape(greeting)}</p>
        <p>Your Invitely partner account has been approved. You can now sign in and start creating invitations.</p>
        <p style="text-align: center; margin: 30px 0;">
            <a href="{html.escape(login_url)}" style="padding: 12px 28px; background-color: #be185d; color: #fff; border-radius: 6px; text-decoration: none;">Sign in</a>
        </p>
        <p>The Invitely Team</p>
    </div>
</body>
</html>"""

    return send_email(
        to_email=email,
        subject="Your Invitely account has been approved",
        html_body=html_body,
        text_body=text_body
    )


def send_guestbook_notification_email(
    email: str,
    invitation_title: str,
    guest_name: str,
    message: str,
    is_approved: bool
) -> bool:
    """Tell an invitation owner that a guest signed the guestbook."""
    moderation_note = "" if is_approved else "\n\nThis message was held for moderation and is not visible yet."

    text_body = f"""{guest_name} left a message on "{invitation_title}":

{message}{moderation_note}

The Invitely Team"""

    html_moderation = "" if is_approved else (
        '<p style="font-size: 13px; color: #92400e;">This message was held for moderation and is not visible yet.</p>'
    )
    html_body = f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2 style="color: #be185d;">New guestbook message</h2>
        <p><strong>{html.escape(guest_name)}</strong> left a message on <em>{html.escape(invitation_title)}</em>:</p>
        <blockquote style="border-left: 4px solid #f9a8d4; margin: 0; padding: 8px 16px; background: #fdf2f8;">{html.escape(message)}</blockquote>
        {html_moderation}
        <p>The Invitely Team</p>
    </div>
</body>
</html>"""

    return send_email(
        to_email=email,
        subject=f"New guestbook message on {invitation_title}",
        html_body=html_body,
        text_body=text_body
    )
