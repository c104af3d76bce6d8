# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""API endpoints exposed by the SenderNet client."""

from .base import BaseEndpoint
from .email import Email

__all__ = ["BaseEndpoint", "Email"]
