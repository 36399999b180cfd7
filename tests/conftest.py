"""Shared pytest fixtures for json2video-mcp tests."""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests

from json2video_mcp.api_client import Json2VideoClient
from json2video_mcp.tools import ToolDispatcher

BASE_URL = "https://api.example.test/v2"


def make_response(payload=None, status_code: int = 200, text: str = "") -> Mock:
    """Build a fake requests.Response returning ``payload`` from .json().

    A payload of None makes .json() raise ValueError like a non-JSON body.
    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session() -> Mock:
    """Mock requests.Session; set ``session.request.return_value`` per test."""
    mock = Mock(spec=requests.Session)
    mock.request.return_value = make_response({"success": True})
    return mock


@pytest.fixture
def client(session: Mock) -> Json2VideoClient:
    return Json2VideoClient(base_url=BASE_URL, session=session)


@pytest.fixture
def dispatcher(client: Json2VideoClient) -> ToolDispatcher:
    """Dispatcher with a configured default API key."""
    return ToolDispatcher(client, default_api_key="env-key")


@pytest.fixture
def keyless_dispatcher(client: Json2VideoClient) -> ToolDispatcher:
    """Dispatcher with no configured API key."""
    return ToolDispatcher(client)
