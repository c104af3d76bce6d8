"""Tests for the status code classifier and the typed request errors."""

import json

import pytest
import requests

from sendernet.exceptions import (
    SenderNetError,
    SenderNetHttpError,
    SenderNetRateLimitError,
    SenderNetRequestError,
    SenderNetValidationError,
    describe_response,
)
from sendernet.http_errors import (
    ResponseClass,
    classify_status,
    map_response,
    raise_for_sender_status,
)


class TestClassifyStatus:
    """Tests for classify_status."""

    @pytest.mark.parametrize("status_code", range(100, 600))
    def test_every_status_has_one_class(self, status_code):
        """Test the partition over the whole status range."""
        result = classify_status(status_code)
        if 200 <= status_code <= 399:
            assert result is ResponseClass.PASSTHROUGH
        elif status_code == 422:
            assert result is ResponseClass.VALIDATION
        elif status_code == 429:
            assert result is ResponseClass.RATE_LIMITED
        else:
            assert result is ResponseClass.HTTP_ERROR

    @pytest.mark.parametrize("status_code", [100, 101, 199])
    def test_informational_is_error(self, status_code):
        """Test 1xx statuses are not treated as success."""
        assert classify_status(status_code) is ResponseClass.HTTP_ERROR


class TestMapResponse:
    """Tests for map_response and the requests hook."""

    @pytest.mark.parametrize("status_code", [200, 201, 204, 302, 399])
    def test_success_passthrough(self, make_response, status_code):
        """Test success responses are returned unchanged."""
        response = make_response(status_code, {"success": True})
        assert map_response(response) is response

    def test_hook_returns_response(self, make_response):
        """Test the hook form passes extra keyword arguments through."""
        response = make_response(200)
        assert raise_for_sender_status(response, timeout=30, verify=True) is response

    def test_validation_error(self, make_response):
        """Test 422 with field errors becomes SenderNetValidationError."""
        body = {
            "message": "The given data was invalid.",
            "errors": {"to.email": ["The to.email field is required."]},
        }
        response = make_response(422, body)

        with pytest.raises(SenderNetValidationError) as exc_info:
            map_response(response)

        error = exc_info.value
        assert str(error) == "The given data was invalid."
        assert error.errors == {"to.email": ["The to.email field is required."]}
        assert error.error_messages == ["to.email: The to.email field is required."]
        assert error.first_error == "to.email: The to.email field is required."
        assert json.loads(error.body) == body
        assert error.status_code == 422

    def test_rate_limit_with_retry_after(self, make_response):
        """Test 429 carries the Retry-After hint in its message."""
        response = make_response(429, b"", {"Retry-After": "60"})

        with pytest.raises(SenderNetRateLimitError) as exc_info:
            map_response(response)

        error = exc_info.value
        assert error.retry_after == "60"
        assert str(error).endswith("[retry after] 60")
        assert "[status code] 429" in str(error)

    def test_rate_limit_without_retry_after(self, make_response):
        """Test no retry hint is added when the header is absent."""
        response = make_response(429)

        with pytest.raises(SenderNetRateLimitError) as exc_info:
            map_response(response)

        assert exc_info.value.retry_after == ""
        assert "[retry after]" not in str(exc_info.value)

    @pytest.mark.parametrize("status_code", [400, 401, 403, 404, 500, 502, 503])
    def test_other_errors_are_http_error(self, make_response, status_code):
        """Test every other error status maps to SenderNetHttpError."""
        with pytest.raises(SenderNetHttpError) as exc_info:
            map_response(make_response(status_code))
        assert exc_info.value.status_code == status_code

    def test_http_error_descriptor(self, make_response):
        """Test the generic error message format."""
        response = make_response(500, reason="Internal Server Error")

        with pytest.raises(SenderNetHttpError) as exc_info:
            map_response(response)

        assert str(exc_info.value) == (
            "[url] /v2/message/send [http method] POST "
            "[status code] 500 [reason phrase] Internal Server Error"
        )

    def test_error_logged(self, make_response, caplog):
        """Test mapped errors are logged as warnings."""
        with caplog.at_level("WARNING", logger="sendernet.http_errors"):
            with pytest.raises(SenderNetHttpError):
                map_response(make_response(503))
        assert "SenderNet API error" in caplog.text


class TestRequestErrors:
    """Tests for the error classes themselves."""

    def test_hierarchy(self, make_response):
        """Test request errors are both SDK errors and requests HTTP errors."""
        error = SenderNetHttpError(make_response(500).request, make_response(500))
        assert isinstance(error, SenderNetRequestError)
        assert isinstance(error, SenderNetError)
        assert isinstance(error, requests.HTTPError)
        assert error.response.status_code == 500
        assert error.request.method == "POST"

    def test_descriptor_with_empty_reason(self, make_response):
        """Test an empty reason phrase leaves the field empty."""
        response = make_response(599, reason="")
        assert describe_response(response.request, response).endswith("[reason phrase] ")

    def test_descriptor_uses_path_and_query(self, make_response):
        """Test the descriptor shows the path, not the full URL."""
        response = make_response(404, method="GET", url="https://api.sender.net/v2/messages?page=2")
        assert describe_response(response.request, response).startswith(
            "[url] /v2/messages?page=2 [http method] GET [status code] 404"
        )

    def test_validation_invalid_json(self, make_response):
        """Test a non-JSON 422 body falls back to the default message."""
        response = make_response(422, "<html>oops</html>")
        error = SenderNetValidationError(response.request, response)

        assert str(error) == "Validation Error"
        assert error.errors == {}
        assert error.error_messages == []
        assert error.first_error is None
        assert error.body == "<html>oops</html>"

    def test_validation_non_object_json(self, make_response):
        """Test a JSON body that is not an object is treated as empty."""
        response = make_response(422, ["a", "b"])
        error = SenderNetValidationError(response.request, response)
        assert str(error) == "Validation Error"
        assert error.errors == {}

    def test_validation_list_errors(self, make_response):
        """Test a list of errors is keyed by position and printed bare."""
        response = make_response(422, {"message": "Invalid", "errors": ["first", "second"]})
        error = SenderNetValidationError(response.request, response)

        assert error.errors == {0: "first", 1: "second"}
        assert error.error_messages == ["first", "second"]

    def test_validation_mixed_entries(self, make_response):
        """Test string and list entries are flattened; others are skipped."""
        body = {
            "message": "Invalid",
            "errors": {
                "subject": "Subject is required.",
                "to.email": ["Required.", "", 5, "Must be valid."],
                "from": {"nested": "ignored"},
                "": ["No field."],
            },
        }
        response = make_response(422, body)
        error = SenderNetValidationError(response.request, response)

        assert error.error_messages == [
            "subject: Subject is required.",
            "to.email: Required.",
            "to.email: Must be valid.",
            "No field.",
        ]

    def test_validation_non_string_message(self, make_response):
        """Test a non-string message is converted to text."""
        response = make_response(422, {"message": 42, "errors": {}})
        error = SenderNetValidationError(response.request, response)
        assert str(error) == "42"

    def test_validation_errors_not_dict_or_list(self, make_response):
        """Test a scalar errors value is ignored."""
        response = make_response(422, {"message": "Invalid", "errors": "bad"})
        error = SenderNetValidationError(response.request, response)
        assert error.errors == {}
        assert error.first_error is None
