# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Delivery of standard library ``EmailMessage`` objects through the API.

``SenderTransport`` lets code that already builds ``email.message.EmailMessage``
objects send them through Sender.net instead of SMTP.

Mapping rules:
    - ``From``: exactly one address is required.
    - ``Reply-To``: at most one address.
    - ``To``: every address becomes a :class:`~sendernet.models.Recipient`
      (the API accepts only one, validation enforces it).
    - Bodies: the ``text/plain`` and ``text/html`` parts.
    - Attachments: a ``message/external-body; access-type=URL`` part becomes
      a :class:`~sendernet.models.UrlAttachment`; any other attachment is
      sent inline as a :class:`~sendernet.models.Base64Attachment`.
    - ``X-Metadata-<key>`` headers become template variables.

Example::

    msg = EmailMessage()
    msg["From"] = "Example <info@example.com>"
    msg["To"] = "John <john@example.com>"
    msg["Subject"] = "Welcome"
    msg.set_content("Hello John")

    SenderTransport(SenderNet()).send(msg)
"""

from __future__ import annotations

import base64
from email.message import EmailMessage, Message
from email.utils import getaddresses
from typing import Any

from pydantic import ValidationError

from .client import SenderNet
from .exceptions import SenderNetRequestError, SenderTransportError
from .logger import get_logger
from .models import Base64Attachment, EmailParams, Recipient, UrlAttachment

logger = get_logger("sendernet.transport")

METADATA_HEADER_PREFIX = "X-Metadata-"
MESSAGE_ID_HEADER = "X-SenderNet-Message-Id"
BODY_HEADER = "X-SenderNet-Body"
DEFAULT_ATTACHMENT_NAME = "attachment"


def _addresses(message: Message, header: str) -> list[tuple[str | None, str]]:
    values = [str(value) for value in message.get_all(header, [])]
    return [(name or None, address) for name, address in getaddresses(values) if address]


def _first_message(exc: ValidationError) -> str:
    errors = exc.errors()
    return str(errors[0]["msg"]) if errors else str(exc)


class SenderTransport:
    """Send ``EmailMessage`` objects with a :class:`~sendernet.client.SenderNet` client."""

    def __init__(self, sender: SenderNet):
        self.sender = sender

    def send(self, message: EmailMessage) -> EmailMessage:
        """Send ``message`` and annotate it with the API response.

        On success ``X-SenderNet-Message-Id`` (from the response's
        ``X-Message-Id``) and ``X-SenderNet-Body`` are added to ``message``.

        Returns:
            The same message object.

        Raises:
            SenderTransportError: Bad addresses or attachments, or the API
                answered with an error status.
            SenderNetAssertError: The message breaks a business rule.
        """
        from_name, from_email = self.get_from(message)
        subject = message.get("Subject")
        params = (
            EmailParams()
            .set_from(from_email)
            .set_from_name(from_name)
            .set_recipients(self.get_recipients(message, "To"))
            .set_subject(str(subject) if subject is not None else None)
            .set_text(self._get_body(message, "plain"))
            .set_html(self._get_body(message, "html"))
        )

        reply_to = self.get_reply_to(message)
        if reply_to is not None:
            reply_to_name, reply_to_email = reply_to
            params.set_reply_to(reply_to_email).set_reply_to_name(reply_to_name or "")

        attachments = self.get_attachments(message)
        if attachments:
            params.set_attachments(attachments)

        variables = self.get_variables(message)
        if variables:
            params.set_variables(variables)

        try:
            result = self.sender.email.send(params)
        except SenderNetRequestError as exc:
            raise SenderTransportError(str(exc), exc.status_code) from exc

        message_id = result["headers"].get("X-Message-Id")
        if message_id:
            message[MESSAGE_ID_HEADER] = message_id
        body = result["response"].text
        if body:
            message[BODY_HEADER] = body
        logger.info("Sent message %s", message_id or "(no id)")
        return message

    def get_from(self, message: Message) -> tuple[str | None, str]:
        addresses = _addresses(message, "From")
        if not addresses:
            raise SenderTransportError("FROM address is required. Please set exactly one FROM address.")
        if len(addresses) > 1:
            raise SenderTransportError(
                f"Multiple FROM addresses are not supported. Found {len(addresses)} addresses, "
                "but only one is allowed."
            )
        return addresses[0]

    def get_reply_to(self, message: Message) -> tuple[str | None, str] | None:
        addresses = _addresses(message, "Reply-To")
        if len(addresses) > 1:
            raise SenderTransportError(
                f"Multiple REPLY-TO addresses are not supported. Found {len(addresses)} addresses, "
                "but only one is allowed."
            )
        return addresses[0] if addresses else None

    def get_recipients(self, message: Message, header: str) -> list[Recipient]:
        recipients = []
        for name, address in _addresses(message, header):
            try:
                recipients.append(Recipient(address, name))
            except ValidationError as exc:
                raise SenderTransportError(
                    f"Invalid {header.upper()} address '{address}': {_first_message(exc)}"
                ) from exc
        return recipients

    @staticmethod
    def _get_body(message: EmailMessage, subtype: str) -> str | None:
        part = message.get_body(preferencelist=(subtype,))
        if part is None or part.get_content_subtype() != subtype:
            return None
        return part.get_content()

    def get_attachments(self, message: EmailMessage) -> list[Any]:
        attachments: list[Any] = []
        for part in message.iter_attachments():
            filename = part.get_filename() or DEFAULT_ATTACHMENT_NAME
            try:
                attachments.append(self._to_attachment(part, filename))
            except ValidationError as exc:
                raise SenderTransportError(
                    f"Invalid attachment '{filename}': {_first_message(exc)}"
                ) from exc
        return attachments

    def _to_attachment(self, part: Message, filename: str) -> Any:
        url = self._external_url(part)
        if url is not None:
            return UrlAttachment(filename=filename, url=url)
        content = part.get_payload(decode=True) or b""
        return Base64Attachment(
            filename=filename,
            data=base64.b64encode(content).decode("ascii"),
            mime_type=part.get_content_type(),
        )

    @staticmethod
    def _external_url(part: Message) -> str | None:
        if part.get_content_type() != "message/external-body":
            return None
        if str(part.get_param("access-type", "")).lower() != "url":
            return None
        url = part.get_param("url")
        return str(url) if url else None

    def get_variables(self, message: Message) -> dict[str, str]:
        variables: dict[str, str] = {}
        for name, value in message.items():
            if name.lower().startswith(METADATA_HEADER_PREFIX.lower()):
                variables[name[len(METADATA_HEADER_PREFIX):]] = str(value)
        return variables

    def __str__(self) -> str:
        return "sender"
