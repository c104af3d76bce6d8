# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Classification of API responses into success or typed errors.

Every status code lands in exactly one class:

    ==========  =================  ===========================
    Status      Class              Outcome
    ==========  =================  ===========================
    200-399     PASSTHROUGH        response returned unchanged
    422         VALIDATION         SenderNetValidationError
    429         RATE_LIMITED       SenderNetRateLimitError
    otherwise   HTTP_ERROR         SenderNetHttpError
    ==========  =================  ===========================

:func:`raise_for_sender_status` is installed as a ``requests`` response hook
by :class:`~sendernet.http_layer.HttpLayer`, so the mapping runs before the
response reaches the endpoint. ``requests`` buffers the body, so reading it
here leaves it intact for the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import requests

from .exceptions import (
    SenderNetHttpError,
    SenderNetRateLimitError,
    SenderNetRequestError,
    SenderNetValidationError,
)
from .logger import get_logger

logger = get_logger("sendernet.http_errors")


class ResponseClass(str, Enum):
    """Outcome of classifying a status code."""

    PASSTHROUGH = "passthrough"
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    HTTP_ERROR = "http_error"


_ERROR_TYPES: dict[ResponseClass, type[SenderNetRequestError]] = {
    ResponseClass.VALIDATION: SenderNetValidationError,
    ResponseClass.RATE_LIMITED: SenderNetRateLimitError,
    ResponseClass.HTTP_ERROR: SenderNetHttpError,
}


def classify_status(status_code: int) -> ResponseClass:
    if 200 <= status_code < 400:
        return ResponseClass.PASSTHROUGH
    if status_code == 422:
        return ResponseClass.VALIDATION
    if status_code == 429:
        return ResponseClass.RATE_LIMITED
    return ResponseClass.HTTP_ERROR


def map_response(response: requests.Response) -> requests.Response:
    """Return ``response`` when successful, raise the matching error otherwise.

    Raises:
        SenderNetValidationError: status 422.
        SenderNetRateLimitError: status 429.
        SenderNetHttpError: any other status outside 200-399.
    """
    response_class = classify_status(response.status_code)
    if response_class is ResponseClass.PASSTHROUGH:
        return response

    error = _ERROR_TYPES[response_class](response.request, response)
    logger.warning("SenderNet API error: %s", error)
    raise error


def raise_for_sender_status(response: requests.Response, *args: Any, **kwargs: Any) -> requests.Response:
    """``requests`` response hook wrapping :func:`map_response`."""
    return map_response(response)
