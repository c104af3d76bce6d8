# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Base class shared by the API endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..uri import build_uri

if TYPE_CHECKING:
    from ..config import SenderNetConfig
    from ..http_layer import HttpLayer


class BaseEndpoint:
    """Holds the transport and the configuration used to build endpoint URLs."""

    def __init__(self, http_layer: HttpLayer, config: SenderNetConfig):
        self.http_layer = http_layer
        self.config = config

    def build_uri(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        return build_uri(self.config, path, params)
