"""
Transactional email over SMTP: verification links, reminder / deactivation notices,
and the "new application" notice to employers.
When SMTP_HOST is not configured the message is logged instead of sent.
"""
from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape

from app.core.config import settings

logger = logging.getLogger("email.client")

FEE_MODEL_LABELS = {
    "percent_fee": "Percentage Fee",
    "flat": "Flat Fee",
    "hourly": "Hourly Rate",
}


def _build_message(to: str, subject: str, html: str) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = settings.EMAIL_FROM
    msg["To"] = to
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


def send_email(to: str, subject: str, html: str) -> bool:
    """Send one HTML email. Returns False when SMTP is not configured; SMTP errors propagate."""
    if not settings.SMTP_HOST:
        logger.info("SMTP not configured; skipping email to %s: %s", to, subject)
        return False

    msg = _build_message(to, subject, html)
    with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
        server.starttls()
        if settings.SMTP_USER and settings.SMTP_PASSWORD:
            server.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
        server.sendmail(settings.EMAIL_FROM, [to], msg.as_string())
    logger.info("Sent email to %s: %s", to, subject)
    return True


def _wrap(body: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">'
        f"{body}<p>Best regards,<br>The Huntorix Team</p></div>"
    )


def verification_email(name: str | None, link: str) -> tuple[str, str]:
    body = (
        "<h2>Welcome to Huntorix</h2>"
        f"<p>Hi {escape(name or 'there')},</p>"
        "<p>Please confirm your email address to activate your headhunter account.</p>"
        f'<p><a href="{escape(link)}">Verify my email</a></p>'
    )
    return "Verify your headhunter account", _wrap(body)


def first_reminder_email(name: str | None) -> tuple[str, str]:
    body = (
        "<h2>Verify Your Account</h2>"
        f"<p>Hi {escape(name or 'there')},</p>"
        "<p>We noticed you haven't verified your email address yet. "
        "Please verify to access all features of Huntorix.</p>"
        "<p>Check your inbox for the verification email we sent when you registered.</p>"
    )
    return "Don't forget to verify your account", _wrap(body)


def deactivation_email(name: str | None) -> tuple[str, str]:
    body = (
        "<h2>Final Reminder: Account Deactivation</h2>"
        f"<p>Hi {escape(name or 'there')},</p>"
        "<p>Your headhunter account has been deactivated because you haven't verified your email address.</p>"
        "<p>If you'd still like to join our platform, please contact our support team.</p>"
    )
    return "Final reminder: Verify your account", _wrap(body)


def application_email(headhunter_name: str | None, job_title: str, eta_days: int,
                      fee_model: str, fee_value: float, link: str) -> tuple[str, str]:
    fee_suffix = "%" if fee_model == "percent_fee" else ""
    body = (
        "<h2>New Application Received</h2>"
        f"<p><strong>{escape(headhunter_name or 'A headhunter')}</strong> has applied to your job posting: "
        f"<strong>{escape(job_title)}</strong></p>"
        "<ul>"
        f"<li><strong>Estimated Time to Fill:</strong> {eta_days} days</li>"
        f"<li><strong>Fee Model:</strong> {FEE_MODEL_LABELS.get(fee_model, fee_model)}</li>"
        f"<li><strong>Proposed Fee:</strong> {fee_value:g}{fee_suffix}</li>"
        "</ul>"
        f'<p><a href="{escape(link)}">Review Application</a></p>'
    )
    return f"New application for {job_title}", _wrap(body)
