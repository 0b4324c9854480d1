# interfaces/notifier.py
"""
Trip Status Notifier
Emails the submitter of a custom trip when an admin changes its status.
Sent over SMTP with STARTTLS; delivery problems are logged, never raised.
"""

import smtplib
from email.message import EmailMessage
from typing import Optional, Tuple
from loguru import logger

from ..config import settings
from ..schemas.plan_schemas import CustomTrip, TripStatus

APPROVED_SUBJECT = "Your Custom Trip Plan Has Been Approved!"
UPDATE_SUBJECT = "Update on Your Custom Trip Plan"
SIGNATURE = "Best regards,\nTravel Mate"


def build_status_email(trip: CustomTrip) -> Tuple[str, str]:
    """
    Compose the status letter for a trip.

    Returns:
        (subject, plain-text body)
    """
    name = trip.userDetails.name
    destination = trip.tourPlan.destination

    if trip.status == TripStatus.APPROVED:
        body = (
            f"Dear {name},\n\n"
            f"We are pleased to inform you that your custom trip plan for {destination} "
            f"has been approved! Our team will contact you shortly to discuss the next steps.\n\n"
            f"{SIGNATURE}"
        )
        return APPROVED_SUBJECT, body

    notes = f"\n\nAdmin Notes: {trip.adminNotes}" if trip.adminNotes else ""
    body = (
        f"Dear {name},\n\n"
        f"We regret to inform you that your custom trip plan for {destination} "
        f"has been {trip.status.value}.{notes}\n\n"
        f"If you have any questions, please feel free to contact us.\n\n"
        f"{SIGNATURE}"
    )
    return UPDATE_SUBJECT, body


class EmailNotifier:
    """SMTP sender for trip status letters"""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 username: Optional[str] = None, password: Optional[str] = None,
                 sender: Optional[str] = None):
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.username = settings.EMAIL_USER if username is None else username
        self.password = settings.EMAIL_PASS if password is None else password
        self.sender = sender or settings.email_sender

    @property
    def configured(self) -> bool:
        return bool(self.host and self.username and self.password)

    def send(self, to: str, subject: str, body: str) -> bool:
        """Send a plain-text email. Returns False on any delivery failure."""
        if not self.configured:
            logger.warning(f"SMTP not configured, skipping email to {to}: {subject}")
            return False

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=30) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(message)
            logger.info(f"Status update email sent to {to}")
            return True
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error sending status update email to {to}: {e}")
            return False

    def notify_status_change(self, trip: CustomTrip, previous_status: TripStatus) -> bool:
        """
        Email the submitter if the trip's status changed.

        Returns:
            True when a letter was delivered
        """
        if trip.status == previous_status:
            logger.debug(f"Trip {trip.id} status unchanged ({trip.status.value}), no email")
            return False
        if not trip.userDetails.email:
            logger.info(f"Trip {trip.id} has no submitter email, no status email sent")
            return False

        subject, body = build_status_email(trip)
        return self.send(trip.userDetails.email, subject, body)


# ============================================
# Global Instance
# ============================================

email_notifier = EmailNotifier()


# ============================================
# Convenience Function
# ============================================

def notify_status_change(trip: CustomTrip, previous_status: TripStatus) -> bool:
    """Notify with the default notifier"""
    return email_notifier.notify_status_change(trip, previous_status)
