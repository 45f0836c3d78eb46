"""
Email Service for sending profile invitations via SMTP.

Each invitation carries a plain-text part, an HTML part with a link to the
hosted form and, optionally, an AMP part with the form inline so the
recipient can submit without leaving their inbox.

Supports Gmail, Office365, and other SMTP providers.
"""

import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from config.settings import Settings, settings as default_settings
from services.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

INVITATION_SUBJECT = "Profile Information Request"


class EmailService:
    """Compose and send invitation emails."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize email service with settings."""
        settings = settings or default_settings
        self.enabled = settings.EMAIL_ENABLED
        self.host = settings.EMAIL_HOST
        self.port = settings.EMAIL_PORT
        self.use_tls = settings.EMAIL_USE_TLS
        self.use_ssl = settings.EMAIL_USE_SSL
        self.username = settings.EMAIL_HOST_USER
        self.password = settings.EMAIL_HOST_PASSWORD
        self.from_address = settings.EMAIL_FROM_ADDRESS or settings.EMAIL_HOST_USER or "no-reply@localhost"
        self.from_name = settings.EMAIL_FROM_NAME
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS
        self.send_amp = settings.EMAIL_SEND_AMP
        self.ttl_hours = settings.TOKEN_TTL_HOURS

    # ============ COMPOSITION ============

    def build_invitation(
        self,
        recipient_email: str,
        form_url: str,
        submit_url: str,
        token: str,
        sender_name: Optional[str] = None,
        message: Optional[str] = None,
    ) -> MIMEMultipart:
        """
        Build the invitation message.

        Args:
            recipient_email: Addressee
            form_url: Link to the hosted profile form
            submit_url: Endpoint the AMP form posts to
            token: Access token embedded in the AMP form
            sender_name: Optional "From" line shown in the body
            message: Optional personal note shown in the body

        Returns:
            multipart/alternative message, parts ordered plain, AMP, HTML
        """
        msg = MIMEMultipart("alternative")
        msg["Subject"] = INVITATION_SUBJECT
        msg["From"] = formataddr((self.from_name, self.from_address))
        msg["To"] = recipient_email

        msg.attach(MIMEText(self._text_body(form_url, sender_name, message), "plain"))
        if self.send_amp:
            amp_body = self._amp_body(submit_url, token, recipient_email, sender_name, message)
            msg.attach(MIMEText(amp_body, "x-amp-html"))
        msg.attach(MIMEText(self._html_body(form_url, sender_name, message), "html"))
        return msg

    def _text_body(self, form_url: str, sender_name: Optional[str], message: Optional[str]) -> str:
        lines = ["Profile Information Request", ""]
        if sender_name:
            lines.append(f"From: {sender_name}")
        if message:
            lines.append(f"Message: {message}")
        lines += [
            "Please open the link below to share your profile details:",
            form_url,
            "",
            f"This link will expire in {self.ttl_hours} hours.",
        ]
        return "\n".join(lines)

    def _intro_html(self, sender_name: Optional[str], message: Optional[str]) -> str:
        parts = []
        if sender_name:
            parts.append(f"<p><strong>From:</strong> {html.escape(sender_name)}</p>")
        if message:
            parts.append(f"<p><strong>Message:</strong> {html.escape(message)}</p>")
        return "\n".join(parts)

    def _html_body(self, form_url: str, sender_name: Optional[str], message: Optional[str]) -> str:
        url = html.escape(form_url, quote=True)
        return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
            <h2>Profile Information Request</h2>
            {self._intro_html(sender_name, message)}
            <p>Please click the link below to share your profile details:</p>
            <a href="{url}"
               style="display: inline-block; padding: 12px 24px; background-color: #007bff; color: white; text-decoration: none; border-radius: 4px; margin: 16px 0;">
                Complete Your Profile
            </a>
            <p><strong>Note:</strong> This link will expire in {self.ttl_hours} hours.</p>
        </div>
        """

    def _amp_body(
        self,
        submit_url: str,
        token: str,
        recipient_email: str,
        sender_name: Optional[str],
        message: Optional[str],
    ) -> str:
        action = html.escape(submit_url, quote=True)
        return f"""<!doctype html>
<html ⚡4email data-css-strict>
<head>
  <meta charset="utf-8">
  <script async src="https://cdn.ampproject.org/v0.js"></script>
  <script async custom-element="amp-form" src="https://cdn.ampproject.org/v0/amp-form-0.1.js"></script>
  <script async custom-template="amp-mustache" src="https://cdn.ampproject.org/v0/amp-mustache-0.2.js"></script>
  <style amp4email-boilerplate>body{{visibility:hidden}}</style>
</head>
<body>
  <h2>Profile Information Request</h2>
  {self._intro_html(sender_name, message)}
  <form method="post" action-xhr="{action}">
    <input type="hidden" name="token" value="{html.escape(token, quote=True)}">
    <input type="hidden" name="recipientEmail" value="{html.escape(recipient_email, quote=True)}">
    <label>Full name <input type="text" name="fullName" required></label>
    <label>Current role <input type="text" name="currentRole"></label>
    <label>Company <input type="text" name="companyName"></label>
    <label>Still with this company?
      <select name="companyStatus" required>
        <option value="">Select</option>
        <option value="yes">Yes</option>
        <option value="no">No</option>
      </select>
    </label>
    <label>Years of experience <input type="number" name="experienceYears" min="0"></label>
    <label>Skills <textarea name="newSkills"></textarea></label>
    <input type="submit" value="Submit">
    <div submit-success>
      <template type="amp-mustache">{{{{message}}}} Reference: {{{{profileId}}}}</template>
    </div>
    <div submit-error>
      <template type="amp-mustache">Could not submit: {{{{detail}}}}</template>
    </div>
  </form>
</body>
</html>
"""

    # ============ DELIVERY ============

    def send(self, msg: MIMEMultipart) -> None:
        """
        Deliver a composed message.

        When sending is disabled the message is logged instead (console backend).

        Raises:
            EmailDeliveryError: SMTP is misconfigured or the server rejected the message
        """
        to_email = msg["To"]
        if not self.enabled:
            logger.warning("Email sending is disabled. Enable EMAIL_ENABLED in settings.")
            logger.info(f"Would send email to {to_email}: {msg['Subject']}")
            return

        if not self.username or not self.password:
            logger.error("Email credentials not configured")
            raise EmailDeliveryError("Email credentials not configured")

        try:
            if self.use_ssl:
                server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
            else:
                server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)

            with server:
                if self.use_tls and not self.use_ssl:
                    server.starttls()
                server.login(self.username, self.password)
                server.sendmail(self.from_address, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            raise EmailDeliveryError(f"Failed to send email: {e}")

        logger.info(f"Email sent successfully to {to_email}")

    def send_invitation(
        self,
        recipient_email: str,
        form_url: str,
        submit_url: str,
        token: str,
        sender_name: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        """Compose and send the invitation for an issued token."""
        msg = self.build_invitation(
            recipient_email,
            form_url,
            submit_url,
            token,
            sender_name=sender_name,
            message=message,
        )
        self.send(msg)
