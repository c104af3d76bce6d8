# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Python SDK for the Sender.net transactional email API.

Features:
    - Message builder with recipients, headers, variables and attachments
    - URL and inline base64 attachments
    - Local validation of the provider's business rules before sending
    - Typed errors for 422 validation failures, 429 rate limits and other
      HTTP failures
    - Adapter for standard library ``email.message.EmailMessage`` objects
    - ``sendernet`` command-line tool

Example::

    from sendernet import EmailParams, Recipient, SenderNet

    sender = SenderNet({"api_key": "secret"})
    params = (
        EmailParams()
        .set_from("info@example.com")
        .set_from_name("Example")
        .set_recipients([Recipient("john@example.com", "John")])
        .set_subject("Welcome")
        .set_text("Hello John")
    )
    result = sender.email.send(params)
"""

__version__ = "0.1.0"

from .client import SenderNet  # noqa: E402
from .config import SenderNetConfig, resolve_config  # noqa: E402
from .exceptions import (  # noqa: E402
    SenderNetAssertError,
    SenderNetConfigError,
    SenderNetError,
    SenderNetHttpError,
    SenderNetRateLimitError,
    SenderNetRequestError,
    SenderNetValidationError,
    SenderTransportError,
)
from .models import (  # noqa: E402
    Base64Attachment,
    EmailParams,
    Header,
    Recipient,
    SmsParams,
    UrlAttachment,
)

__all__ = [
    "Base64Attachment",
    "EmailParams",
    "Header",
    "Recipient",
    "SenderNet",
    "SenderNetAssertError",
    "SenderNetConfig",
    "SenderNetConfigError",
    "SenderNetError",
    "SenderNetHttpError",
    "SenderNetRateLimitError",
    "SenderNetRequestError",
    "SenderNetValidationError",
    "SenderTransportError",
    "SmsParams",
    "UrlAttachment",
    "resolve_config",
]
