# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Message parameter models for the SenderNet API.

Value objects (recipients, headers, attachments) are frozen pydantic models
validated at construction; a bad value raises ``pydantic.ValidationError``,
which is a ``ValueError``. The message builders (``EmailParams``,
``SmsParams``) are plain mutable dataclasses: their setters accept anything
and business rules are checked later by :mod:`sendernet.validation`.

Models:
    - Recipient: primary recipient address and optional display name
    - Header: custom e-mail header
    - UrlAttachment: attachment fetched by the API from a public URL
    - Base64Attachment: attachment sent inline as base64 data
    - EmailParams: builder for a transactional e-mail
    - SmsParams: builder for a phone-addressed message
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Union

from email_validator import EmailNotValidError, validate_email
from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, field_validator

BASE64_SCHEME = "base64://"

_url_adapter = TypeAdapter(AnyUrl)


class Recipient(BaseModel):
    """Primary recipient of an e-mail.

    Attributes:
        email: Recipient address, kept exactly as given.
        name: Optional display name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    email: Annotated[str, Field(description="Recipient email address")]
    name: Annotated[str | None, Field(default=None, description="Display name")]

    def __init__(self, email: str, name: str | None = None, **data: Any) -> None:
        super().__init__(email=email, name=name, **data)

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        # Validate only; the normalized form is discarded.
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(f"Invalid email address '{v}': {exc}") from exc
        return v

    def to_dict(self) -> dict[str, Any]:
        return {"email": self.email, "name": self.name}


class Header(BaseModel):
    """Custom header added to the outgoing e-mail."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Annotated[str, Field(min_length=1, description="Header name")]
    value: Annotated[str, Field(min_length=1, description="Header value")]

    def __init__(self, name: str, value: str, **data: Any) -> None:
        super().__init__(name=name, value=value, **data)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value}


class _AttachmentBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    filename: Annotated[str, Field(description="Attachment filename")]

    @field_validator("filename")
    @classmethod
    def filename_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Filename cannot be empty")
        return v


class UrlAttachment(_AttachmentBase):
    """Attachment the API downloads from a public URL.

    Example::

        UrlAttachment(filename="invoice.pdf", url="https://cdn.example.com/invoice.pdf")
    """

    kind: Literal["url"] = "url"
    url: Annotated[str, Field(description="Absolute URL of the file")]

    @field_validator("url")
    @classmethod
    def url_is_absolute(cls, v: str) -> str:
        if not v:
            raise ValueError("URL cannot be empty")
        try:
            _url_adapter.validate_python(v)
        except ValueError:
            raise ValueError(f"Invalid URL provided: {v}") from None
        return v

    @property
    def value(self) -> str:
        """Wire value: the URL, verbatim."""
        return self.url


class Base64Attachment(_AttachmentBase):
    """Attachment sent inline as base64-encoded content."""

    kind: Literal["base64"] = "base64"
    data: Annotated[str, Field(description="Base64-encoded file content")]
    mime_type: Annotated[str | None, Field(default=None, description="MIME type override")]

    @field_validator("data")
    @classmethod
    def data_is_base64(cls, v: str) -> str:
        if not v:
            raise ValueError("Base64 string cannot be empty")
        content = v.strip()
        # Missing padding is tolerated
        padding_needed = 4 - (len(content) % 4)
        if padding_needed != 4:
            content += "=" * padding_needed
        try:
            base64.b64decode(content, validate=True)
        except (binascii.Error, ValueError):
            raise ValueError("Invalid base64 encoding") from None
        return v

    @property
    def value(self) -> str:
        """Wire value: ``base64://`` followed by the encoded data."""
        return f"{BASE64_SCHEME}{self.data}"


Attachment = Annotated[Union[UrlAttachment, Base64Attachment], Field(discriminator="kind")]
"""Either attachment variant, discriminated by ``kind``."""

ATTACHMENT_TYPES = (UrlAttachment, Base64Attachment)


@dataclass
class EmailParams:
    """Mutable builder for a transactional e-mail.

    Setters return ``self`` so calls can be chained::

        params = (
            EmailParams()
            .set_from("info@example.com")
            .set_from_name("Example")
            .set_recipients([Recipient("john@example.com", "John")])
            .set_subject("Welcome")
            .set_text("Hello John")
        )

    Recipients and headers accept either the value objects or raw mappings
    (``{"email": ..., "name": ...}`` / ``{"name": ..., "value": ...}``).
    """

    from_email: str | None = None
    from_name: str | None = None
    reply_to: str | None = None
    reply_to_name: str | None = None
    recipients: list[Recipient | Mapping[str, Any]] = field(default_factory=list)
    subject: str | None = None
    html: str | None = None
    text: str | None = None
    headers: list[Header | Mapping[str, Any]] = field(default_factory=list)
    variables: dict[str, str] = field(default_factory=dict)
    attachments: list[Attachment] = field(default_factory=list)

    def set_from(self, from_email: str | None) -> EmailParams:
        self.from_email = from_email
        return self

    def set_from_name(self, from_name: str | None) -> EmailParams:
        self.from_name = from_name
        return self

    def set_reply_to(self, reply_to: str | None) -> EmailParams:
        self.reply_to = reply_to
        return self

    def set_reply_to_name(self, reply_to_name: str | None) -> EmailParams:
        self.reply_to_name = reply_to_name
        return self

    def set_recipients(self, recipients: Sequence[Recipient | Mapping[str, Any]]) -> EmailParams:
        self.recipients = list(recipients)
        return self

    def set_subject(self, subject: str | None) -> EmailParams:
        self.subject = subject
        return self

    def set_html(self, html: str | None) -> EmailParams:
        self.html = html
        return self

    def set_text(self, text: str | None) -> EmailParams:
        self.text = text
        return self

    def set_headers(self, headers: Sequence[Header | Mapping[str, Any]]) -> EmailParams:
        self.headers = list(headers)
        return self

    def set_variables(self, variables: Mapping[str, str]) -> EmailParams:
        self.variables = dict(variables)
        return self

    def set_attachments(self, attachments: Sequence[Any]) -> EmailParams:
        self.attachments = list(attachments)
        return self

    def has_url_attachments(self) -> bool:
        return any(isinstance(att, UrlAttachment) for att in self.attachments)

    def has_base64_attachments(self) -> bool:
        return any(isinstance(att, Base64Attachment) for att in self.attachments)


@dataclass
class SmsParams:
    """Builder for a phone-addressed message.

    Attributes:
        from_number: Sender phone number in international format (``+...``).
        to: Recipient phone numbers in international format.
        text: Message text.
    """

    from_number: str | None = None
    to: list[str] = field(default_factory=list)
    text: str | None = None

    def set_from(self, from_number: str | None) -> SmsParams:
        self.from_number = from_number
        return self

    def set_to(self, to: Sequence[str]) -> SmsParams:
        self.to = list(to)
        return self

    def set_text(self, text: str | None) -> SmsParams:
        self.text = text
        return self
