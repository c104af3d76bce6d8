# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Logging utilities for the SenderNet SDK.

Every SDK logger lives under the ``sendernet`` namespace. A ``NullHandler``
sits on that root logger so an application without logging configured sees
no "No handlers could be found" noise. Level, handlers and format belong to
the application, typically via ``logging.basicConfig()`` in its entry point.

Example:
    Typical usage in a module::

        from sendernet.logger import get_logger

        logger = get_logger("sendernet.http")
        logger.debug("POST %s", uri)
"""

import logging

ROOT_LOGGER_NAME = "sendernet"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Retrieve the logger bound to ``name``.

    Names outside the ``sendernet`` namespace are nested under it, so
    ``get_logger("cli")`` returns the ``sendernet.cli`` logger.

    Args:
        name: The logger name. Defaults to "sendernet".

    Returns:
        A ``logging.Logger`` instance bound to the given name.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
