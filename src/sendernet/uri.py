# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Endpoint URL construction."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import quote, urlencode


class UriOptions(Protocol):
    protocol: str
    host: str
    api_path: str | None


def _query_value(value: Any) -> Any:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return value


def build_query(params: Mapping[str, Any] | None) -> str:
    """RFC 3986 query string; ``None`` values are skipped, order is kept."""
    if not params:
        return ""
    pairs = [(key, _query_value(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs, quote_via=quote)


def build_uri(options: UriOptions, path: str, params: Mapping[str, Any] | None = None) -> str:
    """Compose ``{protocol}://{host}[/{api_path}]/{path}[?{query}]``.

    Args:
        options: Anything exposing ``protocol``, ``host`` and ``api_path``
            (normally a :class:`~sendernet.config.SenderNetConfig`).
        path: Endpoint path relative to the API root, e.g. ``message/send``.
        params: Optional query parameters.

    Returns:
        The absolute URL. Host and protocol are not validated.
    """
    api_path = f"/{options.api_path.strip('/')}" if options.api_path else ""
    base = f"{options.protocol}://{options.host}{api_path}/{path}"
    query = build_query(params)
    return f"{base}?{query}" if query else base
