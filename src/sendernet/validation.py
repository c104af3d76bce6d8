# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Business-rule checks run before any request reaches the API.

Each ruleset is an ordered chain of ``(predicate, message)`` pairs. The
``check_*`` functions walk the chain and return the message of the first
rule that fails, or ``None``; they never raise. The ``validate_*`` functions
wrap them and raise :class:`~sendernet.exceptions.SenderNetAssertError`.
Only the first broken rule is reported.

Example:
    >>> params = EmailParams().set_from("info@example.com").set_text("Hi")
    >>> check_email_params(params)
    'Exactly one primary recipient is required'
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from email_validator import EmailNotValidError, validate_email

from .exceptions import SenderNetAssertError
from .models import EmailParams, SmsParams

T = TypeVar("T")
Rule = tuple[Callable[[T], bool], str]


def is_valid_email(value: Any) -> bool:
    """Check that ``value`` is a syntactically valid e-mail address.

    Deliverability (DNS) is not checked.
    """
    if not isinstance(value, str) or not value:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _min_length(value: Any, length: int) -> bool:
    return isinstance(value, str) and len(value) >= length


def first_failure(rules: Iterable[Rule], subject: T) -> str | None:
    """Return the message of the first rule whose predicate is false."""
    for predicate, message in rules:
        if not predicate(subject):
            return message
    return None


EMAIL_RULES: tuple[Rule[EmailParams], ...] = (
    (
        lambda p: p.text is not None or p.html is not None,
        "One of html or text must be supplied",
    ),
    (
        lambda p: len(p.recipients) == 1,
        "Exactly one primary recipient is required",
    ),
    (
        lambda p: is_valid_email(p.from_email),
        "From address must be a valid email address",
    ),
    (
        lambda p: _min_length(p.from_name, 1),
        "From name is required",
    ),
    (
        lambda p: _min_length(p.subject, 1),
        "Subject is required",
    ),
)


def _sms_rules(params: SmsParams) -> list[Rule[SmsParams]]:
    rules: list[Rule[SmsParams]] = [
        (lambda p: bool(p.from_number), "From phone number is required"),
        (lambda p: p.from_number.startswith("+"), "From phone number must start with +"),
        (lambda p: bool(p.to), "At least one recipient is required"),
    ]
    for recipient in params.to:
        rules.append(
            (
                lambda p, r=recipient: isinstance(r, str) and r.startswith("+"),
                "Recipient phone number must start with +",
            )
        )
    rules.append((lambda p: _min_length(p.text, 1), "Text cannot be empty"))
    return rules


def check_email_params(params: EmailParams) -> str | None:
    """Return the first broken e-mail rule, or None when params are sendable."""
    return first_failure(EMAIL_RULES, params)


def check_sms_params(params: SmsParams) -> str | None:
    """Return the first broken SMS rule, or None when params are sendable."""
    return first_failure(_sms_rules(params), params)


def validate_email_params(params: EmailParams) -> None:
    """Raise SenderNetAssertError if ``params`` break an e-mail rule."""
    failure = check_email_params(params)
    if failure is not None:
        raise SenderNetAssertError(failure)


def validate_sms_params(params: SmsParams) -> None:
    """Raise SenderNetAssertError if ``params`` break an SMS rule."""
    failure = check_sms_params(params)
    if failure is not None:
        raise SenderNetAssertError(failure)
