# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""HTTP transport used by the endpoints.

``HttpLayer`` wraps a ``requests.Session`` that carries the authentication
headers and a response hook running the error classifier. Any error status
therefore surfaces as a typed exception out of :meth:`HttpLayer.post`.

Example:
    >>> layer = HttpLayer(SenderNetConfig(api_key="secret"))
    >>> layer.post("https://api.sender.net/v2/message/send", payload)
    {'status_code': 200, 'headers': {...}, 'body': {...}, 'response': <Response [200]>}
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import requests

from . import __version__
from .config import SenderNetConfig
from .http_errors import raise_for_sender_status
from .logger import get_logger

logger = get_logger("sendernet.http")

USER_AGENT = f"sendernet-python/{__version__}"


def _log_response(response: requests.Response, *args: Any, **kwargs: Any) -> None:
    logger.debug(
        "%s %s -> %s %s %s",
        response.request.method,
        response.url,
        response.status_code,
        response.reason,
        response.text,
    )


class HttpLayer:
    """Authenticated JSON transport with error classification.

    Attributes:
        config: Connection settings (API key, timeout, debug flag).
        session: The ``requests.Session`` used for every call.
    """

    def __init__(self, config: SenderNetConfig, session: requests.Session | None = None):
        """Initialize the transport.

        Args:
            config: Resolved SDK configuration.
            session: Optional pre-built session (connection pooling, proxies,
                test adapters). Headers are updated and each hook is added once.
        """
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update(self._headers())
        if config.debug:
            self._install_hook(_log_response)
        self._install_hook(raise_for_sender_status)

    def _install_hook(self, hook: Callable[..., Any]) -> None:
        # A shared session keeps a single copy of each hook.
        hooks = self.session.hooks["response"]
        if hook not in hooks:
            hooks.append(hook)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    def request(self, method: str, uri: str, body: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send one request and normalize the successful response.

        Raises:
            SenderNetRequestError: Raised by the response hook on error status.
            requests.RequestException: Connection or timeout failure.
        """
        logger.debug("%s %s", method, uri)
        response = self.session.request(method, uri, json=body, timeout=self.config.timeout)
        return self.build_response(response)

    def post(self, uri: str, body: dict[str, Any]) -> dict[str, Any]:
        return self.request("POST", uri, body)

    @staticmethod
    def build_response(response: requests.Response) -> dict[str, Any]:
        """Wrap a successful response as ``{status_code, headers, body, response}``.

        ``body`` is the decoded JSON, or an empty dict when the body is empty
        or not JSON.
        """
        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {}
        return {
            "status_code": response.status_code,
            "headers": response.headers,
            "body": body,
            "response": response,
        }

    def close(self) -> None:
        self.session.close()
