# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Transactional e-mail endpoint: ``POST /message/send``."""

from __future__ import annotations

from typing import Any

from ..logger import get_logger
from ..models import EmailParams
from ..payload import build_email_payload
from ..validation import validate_email_params
from .base import BaseEndpoint

logger = get_logger("sendernet.email")


class Email(BaseEndpoint):
    """Send one transactional e-mail per call.

    Access via ``sender.email``.
    """

    endpoint = "message/send"

    def send(self, params: EmailParams) -> dict[str, Any]:
        """Validate, serialize and send ``params``.

        Args:
            params: The message to send. Exactly one recipient is allowed.

        Returns:
            dict with ``status_code``, ``headers``, ``body`` (decoded JSON)
            and the raw ``response``.

        Raises:
            SenderNetAssertError: Local validation failed; nothing was sent.
            SenderNetValidationError: The API answered 422.
            SenderNetRateLimitError: The API answered 429.
            SenderNetHttpError: Any other error status.
        """
        validate_email_params(params)
        payload = build_email_payload(params)
        uri = self.build_uri(self.endpoint)
        logger.debug("Sending email %r", payload.get("subject"))
        return self.http_layer.post(uri, payload)
