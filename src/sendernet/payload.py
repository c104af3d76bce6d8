# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Conversion of EmailParams into the JSON body of ``POST /message/send``.

The wire format has a single ``to`` object, a ``from`` / ``reply_to`` contact
object, a list of headers, a variables object and an attachments object
mapping each filename to either a URL or ``base64://<data>``.

Null values are never sent: a key whose value is ``None`` is dropped, and so
is any list or object that ends up empty once its own nulls are removed.
``False``, ``0`` and ``""`` are kept. Keys always appear in the order
``from, reply_to, to, subject, text, html, headers, variables, attachments``.

Example:
    >>> build_email_payload(params)
    {'from': {'email': 'a@b.com', 'name': 'A'},
     'to': {'email': 'c@d.com', 'name': 'C'},
     'subject': 'S', 'text': 'T'}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .models import ATTACHMENT_TYPES, EmailParams, Header, Recipient

PAYLOAD_KEYS = (
    "from",
    "reply_to",
    "to",
    "subject",
    "text",
    "html",
    "headers",
    "variables",
    "attachments",
)


def _normalize_recipient(recipient: Any) -> Any:
    if isinstance(recipient, Recipient):
        return recipient.to_dict()
    if isinstance(recipient, Mapping):
        return {"email": recipient.get("email"), "name": recipient.get("name")}
    return recipient


def _normalize_header(header: Any) -> Any:
    if isinstance(header, Header):
        return header.to_dict()
    if isinstance(header, Mapping):
        return dict(header)
    return header


def build_contact(email: str | None, name: str | None) -> dict[str, str] | None:
    """Build a ``{email, name}`` object, or None when there is no address."""
    if email is None:
        return None
    return strip_nulls({"email": email, "name": name})


def build_attachments_map(attachments: Iterable[Any]) -> dict[str, str] | None:
    """Map each attachment filename to its wire value.

    Items that are not attachments are ignored. A repeated filename keeps the
    last value. Returns None when nothing is left.
    """
    mapping: dict[str, str] = {}
    for attachment in attachments:
        if isinstance(attachment, ATTACHMENT_TYPES):
            mapping[attachment.filename] = attachment.value
    return mapping or None


def _is_empty_container(value: Any) -> bool:
    return isinstance(value, (dict, list)) and not value


def strip_nulls(value: Any) -> Any:
    """Recursively drop None values and containers emptied by the stripping."""
    if isinstance(value, Mapping):
        stripped = {}
        for key, item in value.items():
            if item is None:
                continue
            item = strip_nulls(item)
            if _is_empty_container(item):
                continue
            stripped[key] = item
        return stripped
    if isinstance(value, (list, tuple)):
        items = []
        for item in value:
            if item is None:
                continue
            item = strip_nulls(item)
            if _is_empty_container(item):
                continue
            items.append(item)
        return items
    return value


def build_email_payload(params: EmailParams) -> dict[str, Any]:
    """Serialize ``params`` into the API request body.

    The first recipient becomes ``to`` even when more were supplied;
    :func:`sendernet.validation.validate_email_params` is what rejects those.
    """
    recipients = [_normalize_recipient(r) for r in params.recipients]

    payload: dict[str, Any] = {
        "from": build_contact(params.from_email, params.from_name),
        "reply_to": build_contact(params.reply_to, params.reply_to_name),
        "to": recipients[0] if recipients else None,
        "subject": params.subject,
        "text": params.text,
        "html": params.html,
        "headers": [_normalize_header(h) for h in params.headers],
        "variables": dict(params.variables),
        "attachments": build_attachments_map(params.attachments),
    }
    return strip_nulls(payload)
