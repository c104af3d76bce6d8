# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy raised by the SenderNet SDK.

Hierarchy::

    SenderNetError
    ├── SenderNetConfigError         no API key could be resolved
    ├── SenderNetAssertError         local validation failed, nothing was sent
    ├── SenderTransportError         raised by the EmailMessage adapter
    └── SenderNetRequestError        the API answered with an error status
        ├── SenderNetHttpError       any status without a dedicated class
        ├── SenderNetValidationError 422, carries field errors
        └── SenderNetRateLimitError  429, carries the Retry-After hint

Request errors are also ``requests.HTTPError`` instances, so code that
already handles ``requests`` failures keeps working.
"""

from __future__ import annotations

import json
from typing import Any

import requests

DEFAULT_VALIDATION_MESSAGE = "Validation Error"


class SenderNetError(Exception):
    """Base class for every error raised by the SDK."""


class SenderNetConfigError(SenderNetError):
    """Raised when the SDK cannot be configured (e.g. missing API key)."""


class SenderNetAssertError(SenderNetError):
    """Raised when message parameters break a provider business rule."""


class SenderTransportError(SenderNetError):
    """Raised when an ``EmailMessage`` cannot be delivered through the API."""

    def __init__(self, message: str, code: int = 0):
        super().__init__(message)
        self.code = code


def describe_response(request: requests.PreparedRequest, response: requests.Response) -> str:
    """Build the generic one-line descriptor of a failed exchange.

    Example:
        ``[url] /v2/message/send [http method] POST [status code] 500
        [reason phrase] Internal Server Error``
    """
    return (
        f"[url] {request.path_url} [http method] {request.method} "
        f"[status code] {response.status_code} [reason phrase] {response.reason or ''}"
    )


class SenderNetRequestError(SenderNetError, requests.HTTPError):
    """Base class for errors mapped from an HTTP response.

    Not raised directly; the classifier always picks a concrete subclass.

    Attributes:
        request: The prepared request that was sent.
        response: The response that triggered the error.
    """

    def __init__(
        self,
        request: requests.PreparedRequest,
        response: requests.Response,
        message: str | None = None,
    ):
        if message is None:
            message = describe_response(request, response)
        super().__init__(message, request=request, response=response)

    @property
    def status_code(self) -> int:
        return self.response.status_code

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class SenderNetHttpError(SenderNetRequestError):
    """Generic 4xx/5xx failure (or any status outside the success range)."""


class SenderNetRateLimitError(SenderNetRequestError):
    """The API rejected the call with 429 Too Many Requests.

    The message carries the ``Retry-After`` value when the server sent one;
    waiting and retrying is left to the caller.
    """

    def __init__(self, request: requests.PreparedRequest, response: requests.Response):
        self.headers = response.headers
        self.retry_after: str = response.headers.get("Retry-After", "") or ""
        message = describe_response(request, response)
        if self.retry_after != "":
            message = f"{message} [retry after] {self.retry_after}"
        super().__init__(request, response, message)


class SenderNetValidationError(SenderNetRequestError):
    """The API rejected the payload with 422 Unprocessable Entity.

    The body is expected to look like::

        {"message": "The given data was invalid.",
         "errors": {"to.email": ["The to.email field is required."]}}

    Attributes:
        body: Raw response body.
        headers: Response headers.
        errors: Field name -> message or list of messages. A JSON list is
            keyed by position. Empty when the body is not a JSON object.
    """

    def __init__(self, request: requests.PreparedRequest, response: requests.Response):
        self.body: str = response.text
        self.headers = response.headers
        payload = self._decode_payload(self.body)
        self.errors: dict[Any, Any] = self._normalize_errors(payload.get("errors"))
        message = payload.get("message")
        if message is None:
            message = DEFAULT_VALIDATION_MESSAGE
        super().__init__(request, response, str(message))

    @staticmethod
    def _decode_payload(body: str) -> dict[str, Any]:
        try:
            decoded = json.loads(body)
        except ValueError:
            return {}
        return decoded if isinstance(decoded, dict) else {}

    @staticmethod
    def _normalize_errors(errors: Any) -> dict[Any, Any]:
        if isinstance(errors, dict):
            return errors
        if isinstance(errors, list):
            return dict(enumerate(errors))
        return {}

    @staticmethod
    def _format_error_message(field: Any, message: str) -> str:
        if isinstance(field, str) and field != "":
            return f"{field}: {message}"
        return message

    @property
    def error_messages(self) -> list[str]:
        """Flatten ``errors`` into ``"field: message"`` strings, in body order."""
        messages: list[str] = []
        for field, entries in self.errors.items():
            if isinstance(entries, list):
                for entry in entries:
                    if isinstance(entry, str) and entry != "":
                        messages.append(self._format_error_message(field, entry))
                continue
            if isinstance(entries, str) and entries != "":
                messages.append(self._format_error_message(field, entries))
        return messages

    @property
    def first_error(self) -> str | None:
        """First flattened error message, or None when there is none."""
        messages = self.error_messages
        return messages[0] if messages else None
