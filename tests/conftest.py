"""Shared fixtures: a mocked Sender.net API and canned ``requests`` responses."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
import requests
import requests_mock

from sendernet.config import SenderNetConfig

API_URL = "https://api.sender.net/v2/message/send"


@pytest.fixture
def sender_api(requests_mock: requests_mock.Mocker) -> requests_mock.Mocker:
    """``POST /v2/message/send`` answering 200; tests re-register to override."""
    requests_mock.post(API_URL, json={"success": True, "message": "Email sent"})
    return requests_mock


@pytest.fixture
def make_response(requests_mock: requests_mock.Mocker) -> Callable[..., requests.Response]:
    """Factory for a real response to ``method url``, fetched without any hooks."""

    def _make(
        status_code: int = 200,
        body: Any = b"",
        headers: dict[str, str] | None = None,
        method: str = "POST",
        url: str = API_URL,
        reason: str | None = None,
    ) -> requests.Response:
        kwargs: dict[str, Any] = {"status_code": status_code, "headers": headers or {}}
        if isinstance(body, (dict, list)):
            kwargs["json"] = body
        elif isinstance(body, str):
            kwargs["text"] = body
        else:
            kwargs["content"] = body
        if reason is not None:
            kwargs["reason"] = reason
        requests_mock.register_uri(method, url, **kwargs)
        with requests.Session() as session:
            return session.request(method, url)

    return _make


@pytest.fixture
def config() -> SenderNetConfig:
    return SenderNetConfig(api_key="test-api-key")
