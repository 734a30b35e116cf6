"""Unit tests for app.services.email: message building, SMTP delivery and backend selection."""

import smtplib
import unittest
from unittest.mock import MagicMock, patch

from app.core.errors import EmailDeliveryError
from app.services.email import (
    OTP_SUBJECT,
    ConsoleEmailDispatcher,
    SmtpEmailDispatcher,
    build_email_dispatcher,
    build_otp_message,
)

from support import make_settings


def _smtp_settings(**overrides: object):
    values = {
        "EMAIL_BACKEND": "smtp",
        "SMTP_HOST": "smtp.example.com",
        "SMTP_PORT": 2525,
        "SMTP_USER": "mailer",
        "SMTP_PASSWORD": "mail-secret",
        "FROM_EMAIL": "NGO Connect <noreply@example.com>",
    }
    values.update(overrides)
    return make_settings(**values)


class TestBuildOtpMessage(unittest.TestCase):
    def test_headers_and_both_bodies_carry_the_code(self) -> None:
        msg = build_otp_message("from@example.com", "to@example.com", "004213", 15)
        self.assertEqual(msg["Subject"], OTP_SUBJECT)
        self.assertEqual(msg["To"], "to@example.com")
        text = msg.get_body(preferencelist=("plain",)).get_content()
        html = msg.get_body(preferencelist=("html",)).get_content()
        self.assertIn("004213", text)
        self.assertIn("004213", html)
        self.assertIn("15 minutes", text)


class TestSmtpEmailDispatcher(unittest.TestCase):
    def test_sends_with_starttls_and_login(self) -> None:
        dispatcher = SmtpEmailDispatcher(_smtp_settings())
        with patch("app.services.email.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            dispatcher.send_otp("ada@example.com", "123456")
        smtp_cls.assert_called_once_with("smtp.example.com", 2525, timeout=30.0)
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("mailer", "mail-secret")
        sent = smtp.send_message.call_args.args[0]
        self.assertEqual(sent["To"], "ada@example.com")

    def test_no_login_without_credentials(self) -> None:
        dispatcher = SmtpEmailDispatcher(
            _smtp_settings(SMTP_USER="", SMTP_PASSWORD=None, SMTP_USE_TLS=False)
        )
        with patch("app.services.email.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            dispatcher.send_otp("ada@example.com", "123456")
        smtp.starttls.assert_not_called()
        smtp.login.assert_not_called()
        smtp.send_message.assert_called_once()

    def test_smtp_failure_raises_delivery_error(self) -> None:
        dispatcher = SmtpEmailDispatcher(_smtp_settings())
        with patch("app.services.email.smtplib.SMTP") as smtp_cls:
            smtp = smtp_cls.return_value.__enter__.return_value
            smtp.send_message.side_effect = smtplib.SMTPRecipientsRefused({})
            with self.assertRaises(EmailDeliveryError):
                dispatcher.send_otp("ada@example.com", "123456")

    def test_connection_failure_raises_delivery_error(self) -> None:
        dispatcher = SmtpEmailDispatcher(_smtp_settings())
        with patch("app.services.email.smtplib.SMTP", side_effect=OSError("refused")):
            with self.assertRaises(EmailDeliveryError):
                dispatcher.send_otp("ada@example.com", "123456")

    def test_requires_host(self) -> None:
        settings = MagicMock()
        settings.SMTP_HOST = None
        with self.assertRaises(ValueError):
            SmtpEmailDispatcher(settings)


class TestConsoleEmailDispatcher(unittest.TestCase):
    def test_logs_message(self) -> None:
        dispatcher = ConsoleEmailDispatcher(from_address="noreply@example.com")
        with self.assertLogs("app.services.email", level="INFO") as logs:
            dispatcher.send_otp("ada@example.com", "654321")
        self.assertIn("ada@example.com", logs.output[0])
        self.assertIn("654321", logs.output[0])


class TestBuildEmailDispatcher(unittest.TestCase):
    def test_selects_backend(self) -> None:
        self.assertIsInstance(
            build_email_dispatcher(make_settings(EMAIL_BACKEND="console")),
            ConsoleEmailDispatcher,
        )
        self.assertIsInstance(build_email_dispatcher(_smtp_settings()), SmtpEmailDispatcher)


if __name__ == "__main__":
    unittest.main()
