import os
import logging
import smtplib
from email.mime.text import MIMEText
from typing import Any, Dict

from pymongo.database import Database

logger = logging.getLogger(__name__)

SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))


def build_notification(message: Dict[str, Any], sender: str, recipient: str) -> MIMEText:
    body = (
        f"Name: {message.get('name')}\n"
        f"Email: {message.get('email')}\n"
        f"Phone: {message.get('phone') or '-'}\n\n"
        f"{message.get('message')}"
    )
    msg = MIMEText(body)
    msg["Subject"] = f"New contact message: {message.get('subject')}"
    msg["From"] = sender
    msg["To"] = recipient
    msg["Reply-To"] = message.get("email") or sender
    return msg


def notify_new_message(database: Database, message: Dict[str, Any]) -> bool:
    """Email the configured inbox about a contact message.

    Returns False when settings are incomplete or delivery fails; never raises.
    """
    settings = database["settings"].find_one({}) or {}
    user = settings.get("email_user")
    password = settings.get("email_pass")
    recipient = settings.get("notification_email")
    if not (user and password and recipient):
        logger.info("Email settings incomplete, skipping notification")
        return False
    try:
        with smtplib.SMTP(SMTP_HOST, SMTP_PORT, timeout=10) as server:
            server.starttls()
            server.login(user, password)
            server.send_message(build_notification(message, user, recipient))
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to send notification to %s", recipient)
        return False
    logger.info("Notification sent to %s", recipient)
    return True
