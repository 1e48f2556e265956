import logging
import re
from functools import lru_cache
from typing import List

from ..utils.email_client import EmailClient
from ..core.config import Settings, settings

logger = logging.getLogger(__name__)

CONFIRM_ACCOUNT_SUBJECT = "Confirm Account"
CONFIRM_ACCOUNT_TEMPLATE = "<p>Please Confirm your Account.</p><p>OTP: {otp}</p>"


class EmailHelper:
    """Sends account emails through EmailClient using the configured sender."""

    def __init__(self, config: Settings, mailer: EmailClient = None):
        self.sender = config.EMAIL_SENDER
        self.mailer = mailer or EmailClient(
            smtp_host=config.SMTP_HOST,
            smtp_port=config.SMTP_PORT,
            username=config.SMTP_USERNAME,
            password=config.SMTP_PASSWORD,
            use_ssl=config.SMTP_USE_SSL,
        )

    def send_email(self, recipients: List[str], subject: str, html_body: str) -> bool:
        try:
            return self.mailer.send_email(
                sender=self.sender,
                recipients=recipients,
                subject=subject,
                text_body=self._strip_html_tags(html_body),
                html_body=html_body,
            )
        except Exception as e:
            logger.exception(f"Email sending failed for '{subject}': {e}")
            return False

    def send_confirm_otp(self, email: str, otp: str) -> bool:
        html_body = CONFIRM_ACCOUNT_TEMPLATE.format(otp=otp)
        return self.send_email([email], CONFIRM_ACCOUNT_SUBJECT, html_body)

    @staticmethod
    def _strip_html_tags(html: str) -> str:
        """Basic HTML to plain text converter."""
        return re.sub("<.*?>", " ", html or "").strip()


@lru_cache
def get_email_helper() -> EmailHelper:
    return EmailHelper(settings)
