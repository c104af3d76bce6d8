"""Tests for the transactional e-mail endpoint against a mocked API."""

import pytest

from sendernet.config import SenderNetConfig
from sendernet.endpoints import Email
from sendernet.exceptions import (
    SenderNetAssertError,
    SenderNetHttpError,
    SenderNetRateLimitError,
    SenderNetValidationError,
)
from sendernet.http_layer import HttpLayer
from sendernet.models import EmailParams, Recipient, UrlAttachment

API_URL = "https://api.sender.net/v2/message/send"


@pytest.fixture
def email(config):
    return Email(HttpLayer(config), config)


def message() -> EmailParams:
    return (
        EmailParams()
        .set_from("a@b.com")
        .set_from_name("A")
        .set_recipients([Recipient("c@d.com", "C")])
        .set_subject("S")
        .set_text("T")
    )


class TestEmailSend:
    """Tests for Email.send."""

    def test_posts_to_message_send(self, email, sender_api):
        """Test the request goes to POST /v2/message/send."""
        email.send(message())

        request = sender_api.last_request
        assert sender_api.call_count == 1
        assert request.method == "POST"
        assert request.url == API_URL

    def test_body_is_wire_payload(self, email, sender_api):
        """Test the minimal message is sent without optional keys."""
        email.send(message())

        assert sender_api.last_request.json() == {
            "from": {"email": "a@b.com", "name": "A"},
            "to": {"email": "c@d.com", "name": "C"},
            "subject": "S",
            "text": "T",
        }

    def test_attachments_sent_as_mapping(self, email, sender_api):
        """Test attachments reach the wire as filename -> value."""
        params = message().set_attachments([
            UrlAttachment(filename="document.pdf", url="https://cdn.example.com/docs/document.pdf"),
        ])
        email.send(params)

        assert sender_api.last_request.json()["attachments"] == {
            "document.pdf": "https://cdn.example.com/docs/document.pdf",
        }

    def test_returns_response_details(self, email, sender_api):
        """Test the decoded body and status are returned."""
        sender_api.post(API_URL, json={"success": True, "message": "Email sent", "emailId": "abc-123"})

        result = email.send(message())

        assert result["status_code"] == 200
        assert result["body"]["emailId"] == "abc-123"

    def test_invalid_params_not_sent(self, email, sender_api):
        """Test a local validation failure sends nothing."""
        params = message().set_recipients([
            Recipient("recipient1@example.com"),
            Recipient("recipient2@example.com"),
        ])

        with pytest.raises(SenderNetAssertError, match="Exactly one primary recipient is required"):
            email.send(params)

        assert not sender_api.called

    def test_missing_body_not_sent(self, email, sender_api):
        """Test a message without html or text is rejected locally."""
        with pytest.raises(SenderNetAssertError, match="One of html or text must be supplied"):
            email.send(message().set_text(None))
        assert not sender_api.called

    def test_validation_error(self, email, sender_api):
        """Test a 422 answer raises SenderNetValidationError with field errors."""
        sender_api.post(API_URL, status_code=422, json={
            "message": "The given data was invalid.",
            "errors": {"to.email": ["The to.email field is required."]},
        })

        with pytest.raises(SenderNetValidationError) as exc_info:
            email.send(message())

        assert str(exc_info.value) == "The given data was invalid."
        assert exc_info.value.first_error == "to.email: The to.email field is required."

    def test_rate_limit_error(self, email, sender_api):
        """Test a 429 answer raises SenderNetRateLimitError."""
        sender_api.post(API_URL, status_code=429, headers={"Retry-After": "60"})

        with pytest.raises(SenderNetRateLimitError) as exc_info:
            email.send(message())

        assert exc_info.value.retry_after == "60"

    def test_server_error(self, email, sender_api):
        """Test a 500 answer raises SenderNetHttpError."""
        sender_api.post(API_URL, status_code=500)

        with pytest.raises(SenderNetHttpError, match=r"\[url\] /v2/message/send \[http method\] POST"):
            email.send(message())


class TestBuildUri:
    """Tests for BaseEndpoint.build_uri."""

    def test_uses_config(self):
        """Test endpoint URLs follow the configured host and api_path."""
        config = SenderNetConfig(api_key="k", host="localhost:8000", protocol="http", api_path="")
        endpoint = Email(HttpLayer(config), config)

        assert endpoint.build_uri("message/send") == "http://localhost:8000/message/send"
        assert endpoint.build_uri("messages", {"page": 1}) == "http://localhost:8000/messages?page=1"
