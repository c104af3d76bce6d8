# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SDK configuration: defaults, caller options, config file and API key lookup.

Example:
    Configuration file format (sendernet.ini)::

        [sendernet]
        api_key = your-api-key
        host = api.sender.net
        protocol = https
        api_path = v2
        timeout = 30
        debug = false

    Resolving the configuration::

        options = load_config_file("/etc/sendernet.ini")
        config = resolve_config(options)
        # SENDER_API_KEY is used when the file has no api_key
"""

from __future__ import annotations

import configparser
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .exceptions import SenderNetConfigError
from .logger import get_logger

API_KEY_ENV_VAR = "SENDER_API_KEY"
CONFIG_SECTION = "sendernet"

logger = get_logger("sendernet.config")


@dataclass
class SenderNetConfig:
    """Connection settings shared by the HTTP layer and the endpoints."""

    host: str = "api.sender.net"
    """API hostname."""

    protocol: str = "https"
    """URL scheme."""

    api_path: str = "v2"
    """Path prefix of every endpoint (empty for none)."""

    api_key: str = ""
    """Bearer token sent with every request."""

    timeout: float = 30
    """Request timeout in seconds, passed to ``requests``."""

    debug: bool = False
    """Log every response body at DEBUG level."""


OPTION_NAMES = frozenset(f.name for f in fields(SenderNetConfig))


def resolve_config(
    options: Mapping[str, Any] | None = None,
    env: Callable[[str], str | None] = os.environ.get,
) -> SenderNetConfig:
    """Merge caller options over the defaults and resolve the API key.

    Priority for the key: ``options["api_key"]`` > ``env("SENDER_API_KEY")``.
    Unknown option names are ignored.

    Args:
        options: Caller supplied options.
        env: Environment lookup, injectable for tests.

    Returns:
        The resolved configuration.

    Raises:
        SenderNetConfigError: If no API key can be resolved.
    """
    values = {key: value for key, value in (options or {}).items() if key in OPTION_NAMES}
    config = SenderNetConfig(**values)

    if not config.api_key:
        config.api_key = env(API_KEY_ENV_VAR) or ""

    if not config.api_key:
        raise SenderNetConfigError('Please set "api_key" in SDK options.')

    return config


def load_config_file(config_path: str | None = None) -> dict[str, Any]:
    """Read the ``[sendernet]`` section of an INI file into an options dict.

    A missing file or section yields an empty dict. Values that fail to
    parse are logged and left out, so defaults apply.
    """
    if not config_path or not Path(config_path).exists():
        return {}

    parser = configparser.ConfigParser()
    parser.read(config_path)
    if not parser.has_section(CONFIG_SECTION):
        return {}

    options: dict[str, Any] = {}
    for key in ("host", "protocol", "api_path", "api_key"):
        value = parser.get(CONFIG_SECTION, key, fallback=None)
        if value is not None:
            options[key] = value.strip()

    if parser.has_option(CONFIG_SECTION, "timeout"):
        try:
            options["timeout"] = parser.getfloat(CONFIG_SECTION, "timeout")
        except ValueError:
            logger.warning(f"Invalid value for timeout in {config_path}, using default")

    if parser.has_option(CONFIG_SECTION, "debug"):
        try:
            options["debug"] = parser.getboolean(CONFIG_SECTION, "debug")
        except ValueError:
            logger.warning(f"Invalid value for debug in {config_path}, using default")

    return options
