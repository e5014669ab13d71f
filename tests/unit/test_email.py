"""Tests for outbound email delivery."""

from unittest.mock import MagicMock

import pytest

from src.phasetracker.core.notifications import email

pytestmark = pytest.mark.unit


@pytest.fixture
def resend_configured(monkeypatch):
    settings = MagicMock()
    settings.resend_api_key = "re_test_key"
    settings.email_from = "PhaseTracker <noreply@example.com>"
    settings.email_send_timeout_seconds = 5
    settings.app_name = "PhaseTracker"
    monkeypatch.setattr(email, "get_settings", lambda: settings)
    return settings


def test_without_api_key_email_is_logged_not_sent(monkeypatch):
    send = MagicMock()
    monkeypatch.setattr(email.resend.Emails, "send", send)

    assert email.send_verification_code_email("a@example.com", "123456") is True
    send.assert_not_called()


def test_verification_code_is_in_body(monkeypatch, resend_configured):
    send = MagicMock()
    monkeypatch.setattr(email.resend.Emails, "send", send)

    assert email.send_verification_code_email("a@example.com", "654321") is True

    params = send.call_args.args[0]
    assert params["to"] == ["a@example.com"]
    assert "654321" in params["html"]


def test_project_name_is_escaped(monkeypatch, resend_configured):
    send = MagicMock()
    monkeypatch.setattr(email.resend.Emails, "send", send)

    email.send_project_assignment_email("a@example.com", "<b>Site</b>")

    assert "&lt;b&gt;Site&lt;/b&gt;" in send.call_args.args[0]["html"]


def test_provider_failure_returns_false(monkeypatch, resend_configured):
    monkeypatch.setattr(email.resend.Emails, "send", MagicMock(side_effect=RuntimeError("down")))

    assert email.send_verification_code_email("a@example.com", "123456") is False
