# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SDK entry point.

Example:
    >>> sender = SenderNet({"api_key": "secret"})
    >>> sender.email.send(params)
    {'status_code': 200, ...}

    With ``SENDER_API_KEY`` exported, no options are needed::

        sender = SenderNet()
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from typing import Any

from .config import SenderNetConfig, resolve_config
from .endpoints import Email
from .http_layer import HttpLayer


class SenderNet:
    """Client for the Sender.net API.

    Attributes:
        config: Resolved configuration.
        http_layer: Transport shared by the endpoints.
        email: Transactional e-mail endpoint.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        http_layer: HttpLayer | None = None,
        env: Callable[[str], str | None] = os.environ.get,
    ):
        """Resolve the configuration and wire the endpoints.

        Args:
            options: Any of ``host``, ``protocol``, ``api_path``, ``api_key``,
                ``timeout``, ``debug``. Other keys are ignored.
            http_layer: Optional transport; built from the configuration
                when omitted.
            env: Environment lookup used for the ``SENDER_API_KEY`` fallback.

        Raises:
            SenderNetConfigError: If no API key can be resolved.
        """
        self.config: SenderNetConfig = resolve_config(options, env=env)
        self.http_layer = http_layer or HttpLayer(self.config)
        self.email = Email(self.http_layer, self.config)

    def __repr__(self) -> str:
        return f"<SenderNet '{self.config.protocol}://{self.config.host}'>"
