"""
Unit tests for EmailService composition and SMTP delivery.

SMTP is replaced with an in-process fake; nothing leaves the machine.
Run: pytest tests/unit/test_email_service.py -v
"""

import smtplib
import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from services.email_service import INVITATION_SUBJECT, EmailService
from services.errors import EmailDeliveryError

FORM_URL = "https://profiles.example.com/profile/abc123"
SUBMIT_URL = "https://profiles.example.com/api/update-profile"


class FakeSMTP:
    """Records calls made by EmailService.send()."""

    instances = []
    fail_with = None

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.calls = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.calls.append("quit")
        return False

    def starttls(self):
        self.calls.append("starttls")

    def login(self, user, password):
        self.calls.append(("login", user, password))

    def sendmail(self, from_addr, to_addrs, body):
        if FakeSMTP.fail_with:
            raise FakeSMTP.fail_with
        self.calls.append(("sendmail", from_addr, to_addrs))
        self.body = body


@pytest.fixture
def fake_smtp(monkeypatch):
    FakeSMTP.instances = []
    FakeSMTP.fail_with = None
    monkeypatch.setattr(smtplib, "SMTP", FakeSMTP)
    monkeypatch.setattr(smtplib, "SMTP_SSL", FakeSMTP)
    return FakeSMTP


def smtp_values(**overrides):
    values = {
        "EMAIL_ENABLED": True,
        "EMAIL_HOST": "smtp.example.com",
        "EMAIL_PORT": 587,
        "EMAIL_HOST_USER": "mailer@example.com",
        "EMAIL_HOST_PASSWORD": "secret",
        "EMAIL_FROM_ADDRESS": "profiles@example.com",
        "EMAIL_FROM_NAME": "Profile Team",
    }
    values.update(overrides)
    return values


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------

class TestBuildInvitation:

    def test_headers(self, make_settings):
        msg = EmailService(make_settings(**smtp_values())).build_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        assert msg["Subject"] == INVITATION_SUBJECT
        assert msg["To"] == "bob@example.com"
        assert msg["From"] == "Profile Team <profiles@example.com>"

    def test_part_order_plain_amp_html(self, make_settings):
        msg = EmailService(make_settings(**smtp_values())).build_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        types = [part.get_content_type() for part in msg.get_payload()]
        assert types == ["text/plain", "text/x-amp-html", "text/html"]

    def test_amp_part_can_be_disabled(self, make_settings):
        service = EmailService(make_settings(**smtp_values(EMAIL_SEND_AMP=False)))
        msg = service.build_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        types = [part.get_content_type() for part in msg.get_payload()]
        assert types == ["text/plain", "text/html"]

    def test_bodies_carry_link_and_expiry(self, make_settings):
        msg = EmailService(make_settings(**smtp_values())).build_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        plain, amp, html_part = msg.get_payload()

        assert FORM_URL in plain.get_payload(decode=True).decode()
        assert "24 hours" in plain.get_payload(decode=True).decode()
        assert f'href="{FORM_URL}"' in html_part.get_payload(decode=True).decode()

    def test_amp_form_posts_token_and_recipient(self, make_settings):
        msg = EmailService(make_settings(**smtp_values())).build_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        amp = msg.get_payload()[1].get_payload(decode=True).decode()

        assert "⚡4email" in amp
        assert f'action-xhr="{SUBMIT_URL}"' in amp
        assert 'name="token" value="abc123"' in amp
        assert 'name="recipientEmail" value="bob@example.com"' in amp
        assert 'name="companyStatus"' in amp

    def test_sender_name_and_message_are_escaped(self, make_settings):
        msg = EmailService(make_settings(**smtp_values())).build_invitation(
            "bob@example.com",
            FORM_URL,
            SUBMIT_URL,
            "abc123",
            sender_name="<b>Eve</b>",
            message="Hi & welcome",
        )
        plain, amp, html_part = msg.get_payload()
        html_body = html_part.get_payload(decode=True).decode()

        assert "&lt;b&gt;Eve&lt;/b&gt;" in html_body
        assert "<b>Eve</b>" not in html_body
        assert "Hi &amp; welcome" in html_body
        assert "From: <b>Eve</b>" in plain.get_payload(decode=True).decode()

    def test_expiry_follows_ttl_setting(self, make_settings):
        msg = EmailService(make_settings(**smtp_values(TOKEN_TTL_HOURS=48))).build_invitation(
            "bob@example.com", FORM_URL, SUBMIT_URL, "abc123"
        )
        assert "48 hours" in msg.get_payload()[0].get_payload(decode=True).decode()


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------

class TestSend:

    def test_disabled_does_not_touch_smtp(self, make_settings, fake_smtp):
        service = EmailService(make_settings(EMAIL_ENABLED=False))
        service.send_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        assert fake_smtp.instances == []

    def test_missing_credentials(self, make_settings, fake_smtp):
        service = EmailService(make_settings(**smtp_values(EMAIL_HOST_PASSWORD=None)))
        with pytest.raises(EmailDeliveryError) as exc_info:
            service.send_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        assert exc_info.value.message == "Email credentials not configured"
        assert fake_smtp.instances == []

    def test_starttls_login_sendmail(self, make_settings, fake_smtp):
        EmailService(make_settings(**smtp_values())).send_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")

        (server,) = fake_smtp.instances
        assert (server.host, server.port, server.timeout) == ("smtp.example.com", 587, 15)
        assert server.calls == [
            "starttls",
            ("login", "mailer@example.com", "secret"),
            ("sendmail", "profiles@example.com", ["bob@example.com"]),
            "quit",
        ]
        assert "Subject: Profile Information Request" in server.body

    def test_ssl_skips_starttls(self, make_settings, fake_smtp):
        service = EmailService(make_settings(**smtp_values(EMAIL_USE_SSL=True, EMAIL_PORT=465)))
        service.send_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")

        (server,) = fake_smtp.instances
        assert server.port == 465
        assert "starttls" not in server.calls

    def test_smtp_failure_is_wrapped(self, make_settings, fake_smtp):
        fake_smtp.fail_with = smtplib.SMTPRecipientsRefused({"bob@example.com": (550, b"no such user")})
        service = EmailService(make_settings(**smtp_values()))

        with pytest.raises(EmailDeliveryError) as exc_info:
            service.send_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")
        assert exc_info.value.message.startswith("Failed to send email")

    def test_connection_failure_is_wrapped(self, monkeypatch, make_settings):
        def refuse(*args, **kwargs):
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(smtplib, "SMTP", refuse)
        with pytest.raises(EmailDeliveryError):
            EmailService(make_settings(**smtp_values())).send_invitation("bob@example.com", FORM_URL, SUBMIT_URL, "abc123")

    def test_from_address_falls_back_to_user(self, make_settings):
        service = EmailService(make_settings(**smtp_values(EMAIL_FROM_ADDRESS=None)))
        assert service.from_address == "mailer@example.com"
